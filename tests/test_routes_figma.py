"""Tests for Figma-to-React API routes (app/routes/figma.py).

Covers:
- POST /api/v2/figma/frames (list frames)
- POST /api/v2/figma/compile (compile a supplied node tree)
- POST /api/v2/figma/to-react (fetch + compile)
- Error mapping from cascade errors to HTTP status codes
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient

from cascade.codegen.models import extract_frames, parse_design_node
from cascade.errors import (
    DesignDataError,
    NotFoundError,
    RateLimitedError,
    TransientNetworkError,
    UnauthorizedError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

VALID_FIGMA_URL = (
    "https://www.figma.com/design/6kGd851qaAX4TiL44vpIrO/"
    "PixelCheese?node-id=5574-3309"
)


def _mock_figma(**methods) -> MagicMock:
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    for name, value in methods.items():
        if isinstance(value, Exception):
            setattr(client, name, AsyncMock(side_effect=value))
        else:
            setattr(client, name, AsyncMock(return_value=value))
    return client


# ---------------------------------------------------------------------------
# POST /api/v2/figma/compile
# ---------------------------------------------------------------------------


class TestCompile:

    @pytest.mark.asyncio
    async def test_compiles_node(self, client: AsyncClient, login_frame_data):
        resp = await client.post("/api/v2/figma/compile", json={
            "node": login_frame_data,
            "framework": "mui-jsx",
        })
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["component_name"] == "LoginCard"
        assert data["framework"] == "mui-jsx"
        assert "import { Box } from '@mui/material';" in data["code"]
        assert '{"Welcome back"}' in data["code"]

    @pytest.mark.asyncio
    async def test_explicit_name_and_instructions(self, client: AsyncClient, login_frame_data):
        resp = await client.post("/api/v2/figma/compile", json={
            "node": login_frame_data,
            "framework": "styled-components",
            "component_name": "SignInCard",
            "additional_instructions": "Keep it accessible",
        })
        data = resp.json()
        assert data["component_name"] == "SignInCard"
        assert "// Keep it accessible" in data["code"]
        assert "export const SignInCard = ({ className }) => {" in data["code"]

    @pytest.mark.asyncio
    async def test_unknown_framework_falls_back(self, client: AsyncClient):
        resp = await client.post("/api/v2/figma/compile", json={
            "node": {"id": "1:1", "name": "Box", "type": "FRAME"},
            "framework": "svelte",
        })
        assert resp.status_code == 200
        assert resp.json()["framework"] == "vanilla-jsx"

    @pytest.mark.asyncio
    async def test_invalid_component_name(self, client: AsyncClient):
        resp = await client.post("/api/v2/figma/compile", json={
            "node": {"id": "1:1", "type": "FRAME"},
            "component_name": "bad-name",
        })
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_malformed_optional_fields_are_skipped(self, client: AsyncClient):
        resp = await client.post("/api/v2/figma/compile", json={
            "node": {
                "type": "FRAME",
                "name": "Card",
                "opacity": "abc",
                "cornerRadius": "round",
                "fills": [{"type": "SOLID", "color": "red"}],
            },
        })
        assert resp.status_code == 200, resp.text
        assert resp.json()["component_name"] == "Card"

    @pytest.mark.asyncio
    async def test_invalid_node(self, client: AsyncClient):
        resp = await client.post("/api/v2/figma/compile", json={
            "node": {"type": "FRAME", "children": "not-a-list"},
        })
        assert resp.status_code == 422
        assert "Invalid design node data" in resp.json()["detail"]


# ---------------------------------------------------------------------------
# POST /api/v2/figma/frames
# ---------------------------------------------------------------------------


class TestFrames:

    @pytest.mark.asyncio
    async def test_requires_figma_token(self, client: AsyncClient):
        with patch("cascade.config.FIGMA_TOKEN", ""):
            resp = await client.post("/api/v2/figma/frames", json={"file_key": "KEY"})
        assert resp.status_code == 400
        assert "FIGMA_TOKEN" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_lists_frames(self, client: AsyncClient, file_document_data):
        frames = extract_frames(parse_design_node(file_document_data["document"]))
        mock = _mock_figma(list_frames=frames)
        with patch("cascade.config.FIGMA_TOKEN", "fake-token"), \
                patch("app.routes.figma.FigmaClient", return_value=mock) as mock_cls:
            resp = await client.post("/api/v2/figma/frames", json={"file_key": "KEY"})

        assert resp.status_code == 200, resp.text
        mock_cls.assert_called_once_with(token="fake-token")
        data = resp.json()
        assert data["file_key"] == "KEY"
        assert [f["id"] for f in data["frames"]] == ["7:16", "7:18", "12:1"]
        first = data["frames"][0]
        assert first["width"] == 320
        assert first["background_color"] == {"r": 1, "g": 1, "b": 1, "a": 1}
        assert data["frames"][2]["width"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,status", [
        (NotFoundError("File not found or you do not have access to this file."), 404),
        (UnauthorizedError("Invalid Figma token. Please check your FIGMA_TOKEN."), 401),
        (RateLimitedError("Rate limit exceeded after 3 attempts."), 429),
        (TransientNetworkError("API request failed with status 500"), 502),
        (DesignDataError("Invalid design node data: document"), 502),
    ])
    async def test_error_mapping(self, client: AsyncClient, error, status):
        with patch("cascade.config.FIGMA_TOKEN", "fake-token"), \
                patch("app.routes.figma.FigmaClient", return_value=_mock_figma(list_frames=error)):
            resp = await client.post("/api/v2/figma/frames", json={"file_key": "KEY"})
        assert resp.status_code == status
        assert str(error) in resp.json()["detail"]


# ---------------------------------------------------------------------------
# POST /api/v2/figma/to-react
# ---------------------------------------------------------------------------


class TestToReact:

    @pytest.mark.asyncio
    async def test_from_figma_url(self, client: AsyncClient, login_frame_data):
        mock = _mock_figma(get_frame=parse_design_node(login_frame_data))
        with patch("cascade.config.FIGMA_TOKEN", "fake-token"), \
                patch("app.routes.figma.FigmaClient", return_value=mock):
            resp = await client.post("/api/v2/figma/to-react", json={
                "figma_url": VALID_FIGMA_URL,
                "framework": "mui-tsx",
            })

        assert resp.status_code == 200, resp.text
        mock.get_frame.assert_awaited_once_with("6kGd851qaAX4TiL44vpIrO", "5574:3309")
        data = resp.json()
        assert data["component_name"] == "LoginCard"
        assert "interface LoginCardProps extends BoxProps {" in data["code"]

    @pytest.mark.asyncio
    async def test_from_file_key_and_frame_id(self, client: AsyncClient, login_frame_data):
        mock = _mock_figma(get_frame=parse_design_node(login_frame_data))
        with patch("cascade.config.FIGMA_TOKEN", "fake-token"), \
                patch("app.routes.figma.FigmaClient", return_value=mock):
            resp = await client.post("/api/v2/figma/to-react", json={
                "file_key": "KEY", "frame_id": "7-16", "component_name": "Login",
            })
        assert resp.status_code == 200
        mock.get_frame.assert_awaited_once_with("KEY", "7-16")
        assert resp.json()["component_name"] == "Login"
        assert resp.json()["framework"] == "vanilla-jsx"

    @pytest.mark.asyncio
    async def test_url_without_node_id(self, client: AsyncClient):
        with patch("cascade.config.FIGMA_TOKEN", "fake-token"):
            resp = await client.post("/api/v2/figma/to-react", json={
                "figma_url": "https://www.figma.com/design/6kGd851qaAX4TiL44vpIrO/PixelCheese",
            })
        assert resp.status_code == 400
        assert "node-id" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_invalid_url(self, client: AsyncClient):
        with patch("cascade.config.FIGMA_TOKEN", "fake-token"):
            resp = await client.post("/api/v2/figma/to-react", json={
                "figma_url": "https://example.com/not-figma",
            })
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_target(self, client: AsyncClient):
        with patch("cascade.config.FIGMA_TOKEN", "fake-token"):
            resp = await client.post("/api/v2/figma/to-react", json={"file_key": "KEY"})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_frame_not_found(self, client: AsyncClient):
        error = NotFoundError("Frame not found in the specified file.")
        with patch("cascade.config.FIGMA_TOKEN", "fake-token"), \
                patch("app.routes.figma.FigmaClient", return_value=_mock_figma(get_frame=error)):
            resp = await client.post("/api/v2/figma/to-react", json={
                "file_key": "KEY", "frame_id": "1:2",
            })
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Frame not found in the specified file."


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
