"""JSX markup emission for a design-node tree.

Depth-first walk: every node becomes a ``<div>`` carrying its derived inline
style. TEXT nodes with characters wrap their text, nodes with children wrap
their children in original order, everything else is self-closing.

Indentation is two spaces per depth level; the style object literal is
re-indented so its closing brace lines up under the element. Output is a pure
function of (subtree, depth).
"""

from __future__ import annotations

import json

from .models import BaseNode, TextNode
from .styles import StyleDeclaration, derive_style

INDENT = "  "


def format_style_literal(style: StyleDeclaration, depth: int) -> str:
    """Pretty-print a style declaration as a JS object literal for a given depth."""
    lines = json.dumps(style, indent=2, ensure_ascii=False).split("\n")
    continuation = INDENT * (depth + 1)
    return "\n".join([lines[0]] + [continuation + line for line in lines[1:]])


def emit_markup(node: BaseNode, depth: int = 0) -> str:
    """Emit the JSX for ``node`` and its whole subtree."""
    indent = INDENT * depth
    style = format_style_literal(derive_style(node), depth)

    if isinstance(node, TextNode) and node.characters:
        text = json.dumps(node.characters, ensure_ascii=False)
        return f"{indent}<div style={{{style}}}>\n{indent}  {{{text}}}\n{indent}</div>"

    if node.children:
        children = "\n".join(emit_markup(child, depth + 1) for child in node.children)
        return f"{indent}<div style={{{style}}}>\n{children}\n{indent}</div>"

    return f"{indent}<div style={{{style}}} />"
