"""Cascade configuration constants — single source of truth for all env vars."""

import os
from pathlib import Path

# Figma REST API — Personal Access Token for design file access
FIGMA_TOKEN = os.getenv("FIGMA_TOKEN", "")
FIGMA_API_BASE = os.getenv("FIGMA_API_BASE", "https://api.figma.com")

# AI completion proxy (OpenAI-compatible chat payload)
AI_PROXY_URL = os.getenv("AI_PROXY_URL", "http://localhost:5000/api/proxy/openai")
AI_PROXY_USERNAME = os.getenv("AI_PROXY_USERNAME", "cascade-cli-user")

# Literal fallback when neither --model nor a stored selection is available
DEFAULT_AI_MODEL = os.getenv("CASCADE_DEFAULT_MODEL", "gpt-4o")

# Selected-model store lives here (config.json)
CONFIG_DIR = Path(os.getenv("CASCADE_CONFIG_DIR", str(Path.home() / ".cascade-cli")))

# Server binding — used by uvicorn when serving app.main
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# CORS — comma-separated origins allowed to call the API
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]
