"""FastAPI Application Entry Point.

Configures the app, lifespan, CORS, and includes the route modules.

Usage:
    uvicorn app.main:app --port 8000
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cascade import __version__
from cascade.config import CORS_ORIGINS
from cascade.logging_config import get_api_logger

from .routes.figma import router as figma_router

logger = get_api_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup checks for optional integrations."""
    from cascade.config import FIGMA_TOKEN
    if not FIGMA_TOKEN:
        logger.warning(
            "FIGMA_TOKEN not set — /api/v2/figma/frames and /api/v2/figma/to-react "
            "will return 400. Set FIGMA_TOKEN in the environment to enable Figma access."
        )
    yield


app = FastAPI(title="Cascade Figma-to-React API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(figma_router)


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__}
