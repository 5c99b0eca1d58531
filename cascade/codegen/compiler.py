"""Compiler facade — design-node tree → React component source.

No I/O: callers fetch the tree and persist the result.

Usage:
    root = parse_design_node(nodes["7:16"]["document"])
    source = compile_component(root, "mui-tsx", component_name="LoginCard")
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..errors import ComponentNameError
from ..settings import MARKUP_BASE_DEPTH
from .markup import emit_markup
from .models import BaseNode, parse_design_node
from .templates import FrameworkVariant, render_component

logger = logging.getLogger(__name__)

FALLBACK_COMPONENT_NAME = "Component"

_NAME_SEPARATORS = re.compile(r"[\s\-_/]+")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def derive_component_name(display_name: str) -> str:
    """Convert a layer name to a PascalCase component identifier.

    Examples:
        "my cool-frame/2" → "MyCoolFrame2"
        "photo_grid_v2" → "PhotoGridV2"
        "???" → "Component"
    """
    words = _NAME_SEPARATORS.split(display_name or "")
    joined = "".join(word[:1].upper() + word[1:].lower() for word in words)
    return _NON_ALNUM.sub("", joined) or FALLBACK_COMPONENT_NAME


def default_component_name(display_name: str) -> str:
    """Suggested name offered to users: the layer name minus non-alphanumerics."""
    return _NON_ALNUM.sub("", display_name or "")


def validate_component_name(name: str) -> str:
    """Check a user-supplied component name; returns it unchanged when valid.

    Raises:
        ComponentNameError: empty, not starting uppercase, or not alphanumeric.
    """
    if not name or not name.strip():
        raise ComponentNameError("Component name cannot be empty")
    if not re.match(r"^[A-Z]", name):
        raise ComponentNameError("Component name must start with an uppercase letter")
    if not re.fullmatch(r"[A-Za-z0-9]+", name):
        raise ComponentNameError("Component name can only contain letters and numbers")
    return name


@dataclass
class ComponentDescriptor:
    """One compile request: target variant, naming, instructions and the root node."""

    root: Union[BaseNode, Dict[str, Any]]
    framework_variant: Union[str, FrameworkVariant, None] = FrameworkVariant.VANILLA_JSX
    component_name: Optional[str] = None
    additional_instructions: Optional[str] = None


def compile_component(
    root: BaseNode,
    framework_variant: Union[str, FrameworkVariant, None] = None,
    component_name: Optional[str] = None,
    additional_instructions: Optional[str] = None,
) -> str:
    """Compile a node tree into the complete source of one React component.

    Args:
        root: Root design node (typed tree; see parse_design_node).
        framework_variant: mui-tsx | mui-jsx | styled-components | vanilla-jsx;
            anything else renders vanilla-jsx.
        component_name: Used verbatim; derived from root.name when omitted.
        additional_instructions: Optional one-line comment placed after imports.
    """
    variant = FrameworkVariant.resolve(framework_variant)
    name = component_name or derive_component_name(root.name)
    markup = emit_markup(root, MARKUP_BASE_DEPTH)
    logger.debug(
        "compile_component: node=%s variant=%s name=%s markup_lines=%d",
        root.id, variant.value, name, markup.count("\n") + 1,
    )
    return render_component(variant, name, markup, additional_instructions)


def compile_descriptor(descriptor: ComponentDescriptor) -> str:
    """compile_component over a ComponentDescriptor; a raw dict root is parsed first."""
    return compile_component(
        parse_design_node(descriptor.root),
        framework_variant=descriptor.framework_variant,
        component_name=descriptor.component_name,
        additional_instructions=descriptor.additional_instructions,
    )
