"""Design-tree → React component compiler."""

from .compiler import (
    ComponentDescriptor,
    compile_component,
    compile_descriptor,
    default_component_name,
    derive_component_name,
    validate_component_name,
)
from .models import DesignNode, extract_frames, parse_design_node
from .templates import FrameworkVariant

__all__ = [
    "ComponentDescriptor",
    "DesignNode",
    "FrameworkVariant",
    "compile_component",
    "compile_descriptor",
    "default_component_name",
    "derive_component_name",
    "extract_frames",
    "parse_design_node",
    "validate_component_name",
]
