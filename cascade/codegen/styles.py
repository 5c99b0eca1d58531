"""Style derivation — one design node → one flat inline-style declaration.

Rules are applied in a fixed order and are independent of each other, except
that a visible solid first fill overwrites the flat background color. Absent
optional fields are skipped; nothing here raises.

Two deliberate simplifications are part of the output contract:
- zero paddings / zero itemSpacing are treated as absent and never emitted;
- stroke borders are always 1px and always opaque.
"""

from __future__ import annotations

from typing import Dict, Optional, Union

from .formatting import color_to_string, plain_number, to_px
from .models import BaseNode, Paint, TextNode

StyleValue = Union[str, int, float]
StyleDeclaration = Dict[str, StyleValue]

SOLID_PAINT = "SOLID"

PRIMARY_AXIS_ALIGN = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "SPACE_BETWEEN": "space-between",
}

COUNTER_AXIS_ALIGN = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
}

TEXT_ALIGN = {
    "LEFT": "left",
    "CENTER": "center",
    "RIGHT": "right",
    "JUSTIFIED": "justify",
}


def _first_solid_paint(paints) -> Optional[Paint]:
    """First paint of the list if it is visible, SOLID and carries a color."""
    if not paints:
        return None
    paint = paints[0]
    if paint.visible is False or paint.type != SOLID_PAINT or paint.color is None:
        return None
    return paint


def _apply_geometry(node: BaseNode, style: StyleDeclaration) -> None:
    box = node.absolute_bounding_box
    if box is not None:
        style["width"] = to_px(box.width)
        style["height"] = to_px(box.height)


def _apply_paint(node: BaseNode, style: StyleDeclaration) -> None:
    if node.background_color is not None:
        style["backgroundColor"] = color_to_string(node.background_color)

    fill = _first_solid_paint(node.fills)
    if fill is not None:
        # Fill opacity replaces the colour alpha; without one the fill is opaque
        alpha = fill.opacity if fill.opacity is not None else 1
        color = fill.color.model_copy(update={"a": alpha})
        style["backgroundColor"] = color_to_string(color)

    if node.corner_radius:
        style["borderRadius"] = to_px(node.corner_radius)

    stroke = _first_solid_paint(node.strokes)
    if stroke is not None:
        opaque = stroke.color.model_copy(update={"a": 1})
        style["border"] = f"1px solid {color_to_string(opaque)}"

    if node.opacity is not None and node.opacity < 1:
        style["opacity"] = plain_number(node.opacity)


def _apply_auto_layout(node: BaseNode, style: StyleDeclaration) -> None:
    if node.layout_mode:
        style["display"] = "flex"
        style["flexDirection"] = "row" if node.layout_mode == "HORIZONTAL" else "column"
        style["justifyContent"] = PRIMARY_AXIS_ALIGN.get(
            node.primary_axis_align_items, "flex-start"
        )
        style["alignItems"] = COUNTER_AXIS_ALIGN.get(
            node.counter_axis_align_items, "flex-start"
        )

        if node.padding_left:
            style["paddingLeft"] = to_px(node.padding_left)
        if node.padding_right:
            style["paddingRight"] = to_px(node.padding_right)
        if node.padding_top:
            style["paddingTop"] = to_px(node.padding_top)
        if node.padding_bottom:
            style["paddingBottom"] = to_px(node.padding_bottom)

        if node.item_spacing:
            style["gap"] = to_px(node.item_spacing)

    if node.layout_grow is not None and node.layout_grow > 0:
        style["flexGrow"] = plain_number(node.layout_grow)


def _apply_typography(node: BaseNode, style: StyleDeclaration) -> None:
    if not isinstance(node, TextNode) or node.style is None:
        return
    text = node.style
    if text.font_size:
        style["fontSize"] = to_px(text.font_size)
    if text.font_family:
        style["fontFamily"] = text.font_family
    if text.font_weight:
        style["fontWeight"] = plain_number(text.font_weight)
    if text.letter_spacing:
        style["letterSpacing"] = to_px(text.letter_spacing)
    if text.line_height_px:
        style["lineHeight"] = to_px(text.line_height_px)
    style["textAlign"] = TEXT_ALIGN.get(text.text_align_horizontal, "left")


def derive_style(node: BaseNode) -> StyleDeclaration:
    """Build the inline style declaration for a single node (children ignored)."""
    style: StyleDeclaration = {}
    _apply_geometry(node, style)
    _apply_paint(node, style)
    _apply_auto_layout(node, style)
    _apply_typography(node, style)
    return style
