"""Structured error codes returned by the HTTP surface.

Every error response has the same body::

    {"code": "<ERROR_CODE>", "detail": "<human readable>", "retryable": bool}

``retryable`` tells the dashboard whether to show a "Try Again" banner
(store unavailable) or a plain operation failure.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes shared between the service and the dashboard frontend."""

    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def format_error(code: ErrorCode, detail: str) -> str:
    """Format an error as a single log/display line.

    Returns:
        ``{ERROR_CODE}: {detail}``
    """
    return f"{code.value}: {detail}"


def error_payload(code: ErrorCode, detail: str, retryable: bool = False) -> dict[str, Any]:
    """Build the JSON body for an error response."""
    return {"code": code.value, "detail": detail, "retryable": retryable}
