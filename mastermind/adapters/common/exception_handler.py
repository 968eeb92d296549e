"""Exception handling utilities for consistent error formatting.

Formats exceptions as structured JSON, logs them consistently, and maps
them to HTTP status codes for the API.
"""

import json
import logging
import traceback
from typing import Any

from ...core.domain.exceptions import MastermindError

logger = logging.getLogger(__name__)


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Format any exception as structured JSON.

    Works with both MastermindError and standard Python exceptions.

    Args:
        exc: The exception to format.
        include_trace: If True, include full stack trace.
        extra_context: Additional context to include in output.

    Returns:
        Dictionary with structured error information.
    """
    if isinstance(exc, MastermindError):
        result = exc.to_dict(include_trace=include_trace)
        if extra_context:
            result.setdefault("context", {}).update(extra_context)
        return result

    tb = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    last_frame = tb[-1] if tb else None

    result: dict[str, Any] = {
        "error": {
            "type": type(exc).__name__,
            "code": "PYTHON_ERR",
            "message": str(exc),
        },
        "location": {
            "class": "<unknown>",
            "method": last_frame.name if last_frame else "<unknown>",
            "file": (
                last_frame.filename.split("\\")[-1].split("/")[-1] if last_frame else "<unknown>"
            ),
            "line": last_frame.lineno if last_frame else 0,
        },
    }

    if extra_context:
        result["context"] = extra_context

    if include_trace:
        result["stack_trace"] = [
            line.strip()
            for line in traceback.format_exception(type(exc), exc, exc.__traceback__)
            if line.strip()
        ]

    return result


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log an exception as structured JSON."""
    log_instance = log or logger
    exc_data = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    log_instance.log(level, json.dumps(exc_data, indent=2))


def get_http_status_code(exc: Exception) -> int:
    """Map exception type to an HTTP status code.

    Args:
        exc: The exception to map.

    Returns:
        HTTP status code (400, 404, 409, 429, 499, 500, 503).
    """
    from ...core.domain.exceptions import (
        DocumentAlreadyExistsError,
        DocumentNotFoundError,
        InvalidDocumentPathError,
        LLMConnectionError,
        LLMRateLimitError,
        OperationCancelledError,
        ValidationError,
    )

    if isinstance(exc, ValidationError | InvalidDocumentPathError):
        return 400
    if isinstance(exc, DocumentNotFoundError):
        return 404
    if isinstance(exc, DocumentAlreadyExistsError):
        return 409
    if isinstance(exc, LLMRateLimitError):
        return 429
    if isinstance(exc, OperationCancelledError):
        return 499
    if isinstance(exc, LLMConnectionError):
        return 503
    if isinstance(exc, MastermindError):
        return 500

    if isinstance(exc, ValueError):
        return 400
    if isinstance(exc, ConnectionError | TimeoutError):
        return 503

    return 500
