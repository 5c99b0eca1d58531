"""Cascade runtime settings — tunable parameters for fetching and code generation.

All values read from environment variables with defaults matching the
documented retry policy. Import from here instead of hardcoding.

Infrastructure config (tokens, URLs, config dir) stays in cascade/config.py.
"""

from __future__ import annotations

import os


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _str(key: str, default: str) -> str:
    return os.getenv(key, default)


# =====================================================================
# Request executor (retry / backoff)
# =====================================================================

# Total attempts per Figma request (first try included)
FIGMA_MAX_ATTEMPTS = _int("FIGMA_MAX_ATTEMPTS", 3)

# Upper bound for a rate-limit wait, whatever retry-after says (seconds)
RATE_LIMIT_MAX_WAIT = _float("RATE_LIMIT_MAX_WAIT", 30.0)

# Used when a 429 carries no usable retry-after header (seconds)
RATE_LIMIT_DEFAULT_RETRY_AFTER = _float("RATE_LIMIT_DEFAULT_RETRY_AFTER", 60.0)

# Upper bound for exponential backoff after network errors (seconds)
NETWORK_BACKOFF_CAP = _float("NETWORK_BACKOFF_CAP", 8.0)


# =====================================================================
# HTTP Clients (Figma API, AI proxy)
# =====================================================================

FIGMA_HTTP_TIMEOUT = _float("FIGMA_HTTP_TIMEOUT", 60.0)

# depth / geometry query params for node fetches
FIGMA_NODE_DEPTH = _int("FIGMA_NODE_DEPTH", 100)
FIGMA_NODE_GEOMETRY = _str("FIGMA_NODE_GEOMETRY", "paths")

# 1 = single POST, no retries
AI_PROXY_MAX_ATTEMPTS = _int("AI_PROXY_MAX_ATTEMPTS", 1)
AI_PROXY_TIMEOUT = _float("AI_PROXY_TIMEOUT", 120.0)


# =====================================================================
# Code generation
# =====================================================================

AI_TEMPERATURE = _float("AI_TEMPERATURE", 0.7)
AI_MAX_TOKENS = _int("AI_MAX_TOKENS", 4000)

# Indentation depth of the root element inside the component's return block
MARKUP_BASE_DEPTH = _int("MARKUP_BASE_DEPTH", 2)
