"""Figma-to-React API endpoints.

Thin HTTP surface over the cascade library: list the frames of a file,
compile a node tree that the caller already holds, or fetch a frame and
compile it in one call.

Requires FIGMA_TOKEN for the endpoints that talk to Figma.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, NoReturn, Optional, Tuple

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, field_validator

from cascade.codegen import (
    FrameworkVariant,
    compile_component,
    derive_component_name,
    parse_design_node,
    validate_component_name,
)
from cascade.codegen.models import BaseNode
from cascade.errors import (
    DesignDataError,
    MissingCredentialError,
    NotFoundError,
    RateLimitedError,
    RequestError,
    UnauthorizedError,
)
from cascade.integrations.figma_client import FigmaClient, parse_figma_url

logger = logging.getLogger("api.routes.figma")

router = APIRouter(prefix="/api/v2/figma", tags=["figma"])


# --- Schemas ---


class FramesRequest(BaseModel):
    """Request for POST /api/v2/figma/frames."""

    file_key: str = Field(..., min_length=1, description="Figma file key")


class FrameSummary(BaseModel):
    """Single frame in a frames listing."""

    id: str
    name: str
    type: str
    width: Optional[float] = None
    height: Optional[float] = None
    background_color: Optional[Dict[str, float]] = None


class FramesResponse(BaseModel):
    """Response for POST /api/v2/figma/frames."""

    file_key: str
    frames: List[FrameSummary] = []


class _ComponentOptions(BaseModel):
    framework: str = Field(
        FrameworkVariant.VANILLA_JSX.value,
        description="mui-tsx | mui-jsx | styled-components | vanilla-jsx (unknown → vanilla-jsx)",
    )
    component_name: Optional[str] = Field(
        None, description="PascalCase component name; derived from the node name when omitted",
    )
    additional_instructions: Optional[str] = Field(
        None, description="Placed as a one-line comment after the imports",
    )

    @field_validator("component_name")
    @classmethod
    def check_component_name(cls, name: Optional[str]) -> Optional[str]:
        if name is None:
            return None
        return validate_component_name(name)


class CompileRequest(_ComponentOptions):
    """Request for POST /api/v2/figma/compile."""

    node: Dict[str, Any] = Field(..., description="Figma node JSON (the frame document)")


class ToReactRequest(_ComponentOptions):
    """Request for POST /api/v2/figma/to-react.

    Either figma_url (with node-id) or file_key + frame_id.
    """

    figma_url: Optional[str] = Field(
        None,
        description="https://www.figma.com/design/{fileKey}/{name}?node-id={nodeId}",
    )
    file_key: Optional[str] = None
    frame_id: Optional[str] = Field(None, description="Node id, 7-16 or 7:16")


class CompileResponse(BaseModel):
    """Generated component source."""

    component_name: str
    framework: str
    code: str


# --- Helpers ---


def _require_token() -> str:
    from cascade.config import FIGMA_TOKEN
    if not FIGMA_TOKEN:
        raise HTTPException(
            status_code=400,
            detail=(
                "Figma integration not configured. "
                "Set FIGMA_TOKEN environment variable with a valid Figma Personal Access Token. "
                "See: https://www.figma.com/developers/api#access-tokens"
            ),
        )
    return FIGMA_TOKEN


def _raise_http(e: RequestError) -> NoReturn:
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=404, detail=str(e)) from e
    if isinstance(e, UnauthorizedError):
        raise HTTPException(status_code=401, detail=str(e)) from e
    if isinstance(e, RateLimitedError):
        raise HTTPException(status_code=429, detail=str(e)) from e
    raise HTTPException(status_code=502, detail=f"Figma API error: {e}") from e


def _resolve_target(payload: ToReactRequest) -> Tuple[str, str]:
    if payload.figma_url:
        try:
            file_key, node_id = parse_figma_url(payload.figma_url)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        if not node_id:
            raise HTTPException(
                status_code=400, detail="Figma URL must include a node-id parameter.",
            )
        return file_key, node_id
    if payload.file_key and payload.frame_id:
        return payload.file_key, payload.frame_id
    raise HTTPException(
        status_code=400, detail="Provide figma_url, or both file_key and frame_id.",
    )


def _compile(node: BaseNode, payload: _ComponentOptions) -> CompileResponse:
    variant = FrameworkVariant.resolve(payload.framework)
    name = payload.component_name or derive_component_name(node.name)
    code = compile_component(node, variant, name, payload.additional_instructions)
    return CompileResponse(component_name=name, framework=variant.value, code=code)


# --- Endpoints ---


@router.post("/frames", response_model=FramesResponse)
async def list_frames(payload: FramesRequest):
    """List FRAME / COMPONENT / INSTANCE nodes of a Figma file in document order.

    Usage:
        POST /api/v2/figma/frames
        { "file_key": "6kGd851qaAX4TiL44vpIrO" }
    """
    token = _require_token()
    try:
        async with FigmaClient(token=token) as client:
            frames = await client.list_frames(payload.file_key)
    except MissingCredentialError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except DesignDataError as e:
        raise HTTPException(status_code=502, detail=f"Figma API error: {e}") from e
    except RequestError as e:
        logger.warning(f"frames: file={payload.file_key} failed: {e}")
        _raise_http(e)

    summaries = []
    for frame in frames:
        box = frame.absolute_bounding_box
        summaries.append(FrameSummary(
            id=frame.id,
            name=frame.name,
            type=frame.type,
            width=box.width if box else None,
            height=box.height if box else None,
            background_color=(
                frame.background_color.model_dump() if frame.background_color else None
            ),
        ))
    logger.info(f"frames: file={payload.file_key}, frames={len(summaries)}")
    return FramesResponse(file_key=payload.file_key, frames=summaries)


@router.post("/compile", response_model=CompileResponse)
async def compile_node(payload: CompileRequest):
    """Compile a node tree supplied by the caller. No Figma access.

    Usage:
        POST /api/v2/figma/compile
        { "node": {"id": "1:2", "type": "FRAME", ...}, "framework": "mui-tsx" }
    """
    try:
        root = parse_design_node(payload.node)
    except DesignDataError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _compile(root, payload)


@router.post("/to-react", response_model=CompileResponse)
async def figma_to_react(payload: ToReactRequest):
    """Fetch one frame from Figma and compile it.

    Usage:
        POST /api/v2/figma/to-react
        { "figma_url": "https://www.figma.com/design/6kGd851.../Login?node-id=7-16",
          "framework": "styled-components" }
    """
    token = _require_token()
    file_key, frame_id = _resolve_target(payload)
    try:
        async with FigmaClient(token=token) as client:
            frame = await client.get_frame(file_key, frame_id)
    except MissingCredentialError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except DesignDataError as e:
        raise HTTPException(status_code=502, detail=f"Figma API error: {e}") from e
    except RequestError as e:
        logger.warning(f"to-react: file={file_key} frame={frame_id} failed: {e}")
        _raise_http(e)

    result = _compile(frame, payload)
    logger.info(
        f"to-react: file={file_key} frame={frame_id} → "
        f"{result.component_name} ({result.framework})"
    )
    return result
