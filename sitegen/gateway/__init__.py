"""
Generation Gateway

Resilient access to the text-generation provider plus the tolerant
extractors that recover JSON and HTML from model output.
"""

from .client import GatewayClient, RetryPolicy, TokenUsage
from .errors import (
    GatewayError,
    GatewayHTTPError,
    GatewayRetryExhaustedError,
    GatewayTimeoutError,
    ResponseParseError,
)
from .parsing import extract_html, has_document_marker, parse_json_response

__all__ = [
    # Client
    "GatewayClient",
    "RetryPolicy",
    "TokenUsage",

    # Errors
    "GatewayError",
    "GatewayHTTPError",
    "GatewayRetryExhaustedError",
    "GatewayTimeoutError",
    "ResponseParseError",

    # Parsing
    "parse_json_response",
    "extract_html",
    "has_document_marker",
]
