"""Typed Figma design-node tree.

Figma's REST API returns loosely-typed nested JSON. The compiler works on a
closed set of node kinds instead: FRAME, COMPONENT, INSTANCE and TEXT get their
own model, every other tag (VECTOR, RECTANGLE, CANVAS, ...) lands on OtherNode
with the raw tag preserved.

Field names are snake_case in Python and camelCase on the wire
(``absoluteBoundingBox``, ``primaryAxisAlignItems``, ``lineHeightPx``, ...).
Nodes are frozen once parsed. Unknown fields are kept so the full node can be
serialised back for the AI prompt.

A malformed optional field (a string opacity, a non-object colour, ...) is
dropped back to its default rather than failing the parse. Only a tree whose
shape is wrong (a non-object node, non-list children) is rejected.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

from ..errors import DesignDataError

# JSON numbers keep their int/float identity (100 must print as 100, not 100.0)
Number = Union[int, float]

FRAME = "FRAME"
COMPONENT = "COMPONENT"
INSTANCE = "INSTANCE"
TEXT = "TEXT"
OTHER = "OTHER"

# Node types listed as "frames" by the frames command
FRAME_LIKE_TYPES = frozenset({FRAME, COMPONENT, INSTANCE})

_TAGGED_TYPES = frozenset({FRAME, COMPONENT, INSTANCE, TEXT})


def _default_on_error(
    model: type, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo,
) -> Any:
    """Validate one field, falling back to its default when the value is malformed."""
    try:
        return handler(value)
    except ValidationError:
        return model.model_fields[info.field_name].get_default(call_default_factory=True)


class _FigmaModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class Color(_FigmaModel):
    """RGBA color, channels normalized to 0.0–1.0."""

    r: Number = 0
    g: Number = 0
    b: Number = 0
    a: Number = 1


class BoundingBox(_FigmaModel):
    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0


class Paint(_FigmaModel):
    """One entry of a node's fills or strokes."""

    type: str = ""
    visible: Optional[bool] = None
    color: Optional[Color] = None
    opacity: Optional[Number] = None

    @field_validator("type", "visible", "color", "opacity", mode="wrap")
    @classmethod
    def _skip_malformed(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo,
    ) -> Any:
        return _default_on_error(cls, value, handler, info)


def _paint_or_blank(item: Any) -> Paint:
    # A blank paint has no type, so it never counts as a solid fill
    try:
        return Paint.model_validate(item)
    except ValidationError:
        return Paint()


class TypeStyle(_FigmaModel):
    font_size: Optional[Number] = None
    font_family: Optional[str] = None
    font_weight: Optional[Number] = None
    letter_spacing: Optional[Number] = None
    line_height_px: Optional[Number] = None
    text_align_horizontal: Optional[str] = None

    @field_validator("*", mode="wrap")
    @classmethod
    def _skip_malformed(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo,
    ) -> Any:
        return _default_on_error(cls, value, handler, info)


class BaseNode(_FigmaModel):
    id: str = ""
    name: str = ""

    absolute_bounding_box: Optional[BoundingBox] = None

    background_color: Optional[Color] = None
    fills: List[Paint] = Field(default_factory=list)
    strokes: List[Paint] = Field(default_factory=list)
    corner_radius: Optional[Number] = None
    opacity: Optional[Number] = None

    layout_mode: Optional[str] = None
    primary_axis_align_items: Optional[str] = None
    counter_axis_align_items: Optional[str] = None
    padding_left: Optional[Number] = None
    padding_right: Optional[Number] = None
    padding_top: Optional[Number] = None
    padding_bottom: Optional[Number] = None
    item_spacing: Optional[Number] = None
    layout_grow: Optional[Number] = None

    children: List[DesignNode] = Field(default_factory=list)

    @field_validator(
        "id", "name", "absolute_bounding_box", "background_color", "corner_radius",
        "opacity", "layout_mode", "primary_axis_align_items", "counter_axis_align_items",
        "padding_left", "padding_right", "padding_top", "padding_bottom",
        "item_spacing", "layout_grow",
        mode="wrap",
    )
    @classmethod
    def _skip_malformed(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo,
    ) -> Any:
        return _default_on_error(cls, value, handler, info)

    @field_validator("fills", "strokes", mode="wrap")
    @classmethod
    def _tolerant_paints(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        if value is None:
            return []
        try:
            return handler(value)
        except ValidationError:
            if not isinstance(value, list):
                return []
            return [_paint_or_blank(item) for item in value]

    @field_validator("children", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class FrameNode(BaseNode):
    type: Literal["FRAME"] = FRAME


class ComponentNode(BaseNode):
    type: Literal["COMPONENT"] = COMPONENT


class InstanceNode(BaseNode):
    type: Literal["INSTANCE"] = INSTANCE


class TextNode(BaseNode):
    type: Literal["TEXT"] = TEXT
    characters: Optional[str] = None
    style: Optional[TypeStyle] = None

    @field_validator("characters", "style", mode="wrap")
    @classmethod
    def _skip_malformed_text(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo,
    ) -> Any:
        return _default_on_error(cls, value, handler, info)


class OtherNode(BaseNode):
    """Any node whose type is not one of the tagged kinds."""

    type: str = OTHER


def _node_tag(value: Any) -> str:
    if isinstance(value, dict):
        node_type = value.get("type")
    else:
        node_type = getattr(value, "type", None)
    return node_type if node_type in _TAGGED_TYPES else OTHER


DesignNode = Annotated[
    Union[
        Annotated[FrameNode, Tag(FRAME)],
        Annotated[ComponentNode, Tag(COMPONENT)],
        Annotated[InstanceNode, Tag(INSTANCE)],
        Annotated[TextNode, Tag(TEXT)],
        Annotated[OtherNode, Tag(OTHER)],
    ],
    Discriminator(_node_tag),
]

for _model in (BaseNode, FrameNode, ComponentNode, InstanceNode, TextNode, OtherNode):
    _model.model_rebuild()

_NODE_ADAPTER: TypeAdapter = TypeAdapter(DesignNode)


def parse_design_node(data: Any) -> BaseNode:
    """Validate a raw JSON object graph into a typed node tree.

    Already-parsed nodes are returned unchanged.

    Raises:
        DesignDataError: if the data is not shaped like a node tree.
    """
    if isinstance(data, BaseNode):
        return data
    try:
        return _NODE_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise DesignDataError(f"Invalid design node data: {e}") from e


def node_to_dict(node: BaseNode) -> dict:
    """Serialise a node back to Figma's camelCase JSON shape."""
    return node.model_dump(by_alias=True, exclude_none=True)


def extract_frames(node: Optional[BaseNode]) -> List[BaseNode]:
    """Collect FRAME/COMPONENT/INSTANCE nodes in pre-order (parents before children)."""
    frames: List[BaseNode] = []
    if node is None:
        return frames
    if node.type in FRAME_LIKE_TYPES:
        frames.append(node)
    for child in node.children:
        frames.extend(extract_frames(child))
    return frames
