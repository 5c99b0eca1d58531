"""Persisting generated component source."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .codegen.templates import FrameworkVariant

logger = logging.getLogger(__name__)

_TYPESCRIPT_VARIANTS = frozenset({FrameworkVariant.MUI_TSX, FrameworkVariant.VANILLA_JSX})


def default_extension(variant: Union[str, FrameworkVariant, None]) -> str:
    """tsx for the typed variants (mui-tsx, vanilla-jsx), jsx otherwise."""
    return "tsx" if FrameworkVariant.resolve(variant) in _TYPESCRIPT_VARIANTS else "jsx"


def resolve_output_path(
    component_name: str,
    variant: Union[str, FrameworkVariant, None],
    output: Optional[Union[str, Path]] = None,
) -> Path:
    """Explicit output path, else ./{ComponentName}.{ext}; always absolute."""
    if output:
        return Path(output).expanduser().resolve()
    return Path(f"{component_name}.{default_extension(variant)}").resolve()


def write_component(code: str, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(code, encoding="utf-8")
    logger.info(f"write_component: {path} ({len(code)} chars)")
    return path
