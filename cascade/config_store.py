"""Persistent CLI configuration (selected AI model).

Stored as JSON in ~/.cascade-cli/config.json (CASCADE_CONFIG_DIR overrides
the directory). A missing or unreadable file reads as an empty config.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from . import config

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def get_config_path(config_dir: Optional[Path] = None) -> Path:
    return Path(config_dir or config.CONFIG_DIR) / CONFIG_FILENAME


def read_config(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    path = get_config_path(config_dir)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.info(f"read_config: ignoring unreadable {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: Dict[str, Any], config_dir: Optional[Path] = None) -> Path:
    path = get_config_path(config_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return path


def get_selected_model(config_dir: Optional[Path] = None) -> Optional[str]:
    return read_config(config_dir).get("selectedModel")


def set_selected_model(model: str, config_dir: Optional[Path] = None) -> Path:
    data = read_config(config_dir)
    data["selectedModel"] = model
    return save_config(data, config_dir)


def resolve_model(explicit: Optional[str] = None, config_dir: Optional[Path] = None) -> str:
    """Explicit choice, else the stored selection, else DEFAULT_AI_MODEL."""
    return explicit or get_selected_model(config_dir) or config.DEFAULT_AI_MODEL
