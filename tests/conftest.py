"""Root conftest for API and library tests.

Provides:
- Async HTTP client bound to the FastAPI app (ASGITransport, no network)
- Sample Figma node documents shared across test modules
"""

from __future__ import annotations

from typing import Any, AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ---------------------------------------------------------------------------
# FastAPI test client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI routes."""
    from app.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Sample node documents
# ---------------------------------------------------------------------------

@pytest.fixture
def login_frame_data() -> Dict[str, Any]:
    """A small auto-layout card: title text + button instance + vector icon."""
    return {
        "id": "7:16",
        "name": "Login Card",
        "type": "FRAME",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 320, "height": 200},
        "backgroundColor": {"r": 1, "g": 1, "b": 1, "a": 1},
        "cornerRadius": 8,
        "layoutMode": "VERTICAL",
        "primaryAxisAlignItems": "CENTER",
        "counterAxisAlignItems": "CENTER",
        "paddingLeft": 24,
        "paddingRight": 24,
        "paddingTop": 0,
        "paddingBottom": 0,
        "itemSpacing": 12,
        "children": [
            {
                "id": "7:17",
                "name": "Title",
                "type": "TEXT",
                "characters": "Welcome back",
                "style": {
                    "fontFamily": "Inter",
                    "fontSize": 20,
                    "fontWeight": 600,
                    "lineHeightPx": 24,
                    "textAlignHorizontal": "CENTER",
                },
            },
            {
                "id": "7:18",
                "name": "Primary Button",
                "type": "INSTANCE",
                "absoluteBoundingBox": {"x": 24, "y": 120, "width": 272, "height": 40},
                "fills": [{"type": "SOLID", "color": {"r": 0, "g": 0.4, "b": 1, "a": 1}}],
            },
            {
                "id": "7:19",
                "name": "icon",
                "type": "VECTOR",
            },
        ],
    }


@pytest.fixture
def file_document_data(login_frame_data) -> Dict[str, Any]:
    """GET /v1/files/:key response with two pages."""
    return {
        "name": "Auth Screens",
        "document": {
            "id": "0:0",
            "name": "Document",
            "type": "DOCUMENT",
            "children": [
                {
                    "id": "0:1",
                    "name": "Page 1",
                    "type": "CANVAS",
                    "children": [
                        login_frame_data,
                        {"id": "9:1", "name": "Divider", "type": "RECTANGLE"},
                    ],
                },
                {
                    "id": "0:2",
                    "name": "Components",
                    "type": "CANVAS",
                    "children": [
                        {"id": "12:1", "name": "Button", "type": "COMPONENT"},
                    ],
                },
            ],
        },
    }
