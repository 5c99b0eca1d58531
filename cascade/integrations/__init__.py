"""Remote integrations: Figma REST API, AI proxy, shared request executor."""

from .ai_proxy import AIProxyClient, extract_code_block
from .figma_client import FigmaClient, normalize_node_id, parse_figma_url
from .request_executor import AttemptOutcome, RequestAttempt, RequestExecutor

__all__ = [
    "AIProxyClient",
    "AttemptOutcome",
    "FigmaClient",
    "RequestAttempt",
    "RequestExecutor",
    "extract_code_block",
    "normalize_node_id",
    "parse_figma_url",
]
