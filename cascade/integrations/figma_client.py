"""Figma REST API client for the Figma-to-React compiler.

Fetches file documents and node subtrees using Personal Access Token (PAT)
authentication. Every request goes through RequestExecutor, which owns the
retry / backoff policy.

Environment:
    FIGMA_TOKEN — Figma Personal Access Token (required)

Usage:
    async with FigmaClient() as client:
        frames = await client.list_frames("6kGd851qaAX4TiL44vpIrO")
        frame = await client.get_frame("6kGd851qaAX4TiL44vpIrO", "7-16")
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote

import httpx

from ..codegen.models import BaseNode, extract_frames, parse_design_node
from ..config import FIGMA_API_BASE
from ..errors import MissingCredentialError, NotFoundError, UnauthorizedError
from ..settings import FIGMA_HTTP_TIMEOUT, FIGMA_NODE_DEPTH, FIGMA_NODE_GEOMETRY
from .request_executor import AttemptObserver, RequestExecutor

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Figma-Token"


def normalize_node_id(node_id: str) -> str:
    """URL node ids use '16650-538', the API uses '16650:538'."""
    return unquote(node_id).replace("-", ":")


def parse_figma_url(url: str) -> Tuple[str, Optional[str]]:
    """Parse a Figma URL into (file_key, node_id); node_id is None when absent.

    Supports:
        https://www.figma.com/design/{fileKey}/{name}?node-id={nodeId}
        https://www.figma.com/file/{fileKey}/{name}?node-id={nodeId}

    Raises:
        ValueError if the URL carries no file key.
    """
    path_match = re.search(r"figma\.com/(?:design|file)/([a-zA-Z0-9]+)", url)
    if not path_match:
        raise ValueError(
            "Invalid Figma URL. Expected format: "
            "https://www.figma.com/design/{fileKey}/...?node-id={nodeId}"
        )
    node_match = re.search(r"[?&]node-id=([^&#]+)", url)
    node_id = normalize_node_id(node_match.group(1)) if node_match else None
    return path_match.group(1), node_id


class FigmaClient:
    """Async Figma REST API client.

    Args:
        token: Figma PAT. Falls back to FIGMA_TOKEN env var.
        base_url: API root, defaults to https://api.figma.com.
        timeout: HTTP request timeout in seconds.
        executor: Retry policy; a default RequestExecutor when omitted.
        on_attempt: Observer for every request attempt (progress reporting).
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = FIGMA_API_BASE,
        timeout: float = FIGMA_HTTP_TIMEOUT,
        executor: Optional[RequestExecutor] = None,
        on_attempt: Optional[AttemptObserver] = None,
    ):
        self._token = token or os.getenv("FIGMA_TOKEN", "")
        if not self._token:
            raise MissingCredentialError(
                "Figma token not configured. Set FIGMA_TOKEN environment variable "
                "or pass token= to FigmaClient(). "
                "Get a token at: https://www.figma.com/developers/api#authentication"
            )
        self._base_url = base_url
        self._timeout = timeout
        self._executor = executor or RequestExecutor()
        self._on_attempt = on_attempt
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "FigmaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request to the Figma API."""
        client = await self._get_client()
        try:
            return await self._executor.execute(
                client,
                "GET",
                path,
                headers={TOKEN_HEADER: self._token},
                params=params,
                on_attempt=self._on_attempt,
            )
        except NotFoundError as e:
            raise NotFoundError(
                "File not found or you do not have access to this file.",
                status_code=e.status_code,
            ) from e
        except UnauthorizedError as e:
            raise UnauthorizedError(
                "Invalid Figma token. Please check your FIGMA_TOKEN.",
                status_code=e.status_code,
            ) from e

    # ------------------------------------------------------------------
    # Core API methods
    # ------------------------------------------------------------------

    async def get_file(self, file_key: str) -> Dict[str, Any]:
        """Fetch a whole Figma file.

        GET /v1/files/:key
        """
        data = await self._get(f"/v1/files/{file_key}")
        logger.info(f"get_file: file={file_key}, name={data.get('name', '')}")
        return data

    async def get_file_nodes(
        self,
        file_key: str,
        node_ids: List[str],
        depth: int = FIGMA_NODE_DEPTH,
        geometry: str = FIGMA_NODE_GEOMETRY,
    ) -> Dict[str, Any]:
        """Fetch specific node subtrees from a Figma file.

        GET /v1/files/:key/nodes?ids=...&depth=100&geometry=paths
        """
        ids_param = ",".join(node_ids)
        data = await self._get(
            f"/v1/files/{file_key}/nodes",
            params={"ids": ids_param, "depth": str(depth), "geometry": geometry},
        )
        logger.info(
            f"get_file_nodes: file={file_key}, requested={len(node_ids)}, "
            f"returned={len(data.get('nodes') or {})}"
        )
        return data

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    async def get_frame_data(self, file_key: str, frame_id: str) -> Dict[str, Any]:
        """Raw JSON document of one frame; accepts '7-16' or '7:16' ids.

        Raises:
            NotFoundError if the file has no such node.
        """
        api_id = normalize_node_id(frame_id)
        data = await self.get_file_nodes(file_key, [api_id])
        entry = (data.get("nodes") or {}).get(api_id) or {}
        document = entry.get("document")
        if not document:
            raise NotFoundError("Frame not found in the specified file.")
        return document

    async def get_frame(self, file_key: str, frame_id: str) -> BaseNode:
        """Typed node tree of one frame; accepts '7-16' or '7:16' ids."""
        return parse_design_node(await self.get_frame_data(file_key, frame_id))

    async def list_frames(self, file_key: str) -> List[BaseNode]:
        """All FRAME / COMPONENT / INSTANCE nodes of a file, in document order."""
        data = await self.get_file(file_key)
        document = data.get("document")
        if not document:
            return []
        frames = extract_frames(parse_design_node(document))
        logger.info(f"list_frames: file={file_key}, frames={len(frames)}")
        return frames
