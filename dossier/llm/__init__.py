"""Generative service access: backends, the retrying client, structured parsing."""

from .protocols import (
    JSON_MIME_TYPE,
    WEB_SEARCH_TOOL,
    Candidate,
    GenerationConfig,
    GenerationRequest,
    GenerationResponse,
    GenerativeBackend,
    MediaRequest,
    MediaResponse,
    Part,
)
from .adapters import AnthropicAdapter, OpenRouterAdapter
from .client import ErrorKind, ServiceClient, classify_error, extract_status_code
from .structured import parse_structured, strip_code_fences

__all__ = [
    # Protocols
    "GenerativeBackend",
    "GenerationConfig",
    "GenerationRequest",
    "GenerationResponse",
    "Candidate",
    "Part",
    "MediaRequest",
    "MediaResponse",
    "JSON_MIME_TYPE",
    "WEB_SEARCH_TOOL",
    # Adapters
    "OpenRouterAdapter",
    "AnthropicAdapter",
    # Client
    "ServiceClient",
    "ErrorKind",
    "classify_error",
    "extract_status_code",
    # Structured output
    "parse_structured",
    "strip_code_fences",
]
