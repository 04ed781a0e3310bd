"""Translate failures into the ``{"detail": ...}`` bodies clients see.

Details (exception text, correlation ids) go to the log; the returned
message only says which post operation failed and whether a retry helps.
"""

import logging
from dataclasses import dataclass

from post_api.core.logging import log_event

logger = logging.getLogger(__name__)

_WRITE_ACTIONS = {
    "add_post": "create the post",
    "delete_post": "delete the post",
}


@dataclass(frozen=True)
class NormalizedError:
    """Client-facing error: message, category, retry hint and status code."""

    user_message: str
    error_category: str
    retryable: bool
    http_status: int = 500


def _is_lock_error(exc: Exception) -> bool:
    text = str(exc).lower()
    return "locked" in text or "busy" in text


def normalize_db_error(
    exc: Exception,
    *,
    operation: str,
    correlation_id: str | None = None,
) -> NormalizedError:
    """Map a failed, rolled-back post write to a response.

    SQLite lock contention is the one transient case (503, retryable);
    any other store failure is a 500 the client should not repeat blindly.
    """
    action = _WRITE_ACTIONS.get(operation, operation)
    if _is_lock_error(exc):
        error = NormalizedError(
            user_message=f"Could not {action}: the database is busy. Retry shortly.",
            error_category="db_locked",
            retryable=True,
            http_status=503,
        )
    else:
        error = NormalizedError(
            user_message=f"Could not {action} because of a database error.",
            error_category="db",
            retryable=False,
        )

    log_event(
        logger, "error", "db_write_failed",
        operation=operation,
        error_category=error.error_category,
        correlation_id=correlation_id or "N/A",
        detail=f"{type(exc).__name__}: {exc}",
    )
    return error


def normalize_validation_error(messages: list[str]) -> NormalizedError:
    """Fold request validation messages into a single 400."""
    log_event(logger, "info", "validation_failed", count=len(messages))
    return NormalizedError(
        user_message=f"Validation failed: {'; '.join(messages)}",
        error_category="validation",
        retryable=False,
        http_status=400,
    )


def normalize_unknown_error(exc: Exception, *, operation: str) -> NormalizedError:
    """Anything the routes did not anticipate: log it, answer with a bare 500."""
    log_event(
        logger, "exception", "unknown_error",
        operation=operation,
        detail=f"{type(exc).__name__}: {exc}",
    )
    return NormalizedError(
        user_message="An unexpected error occurred.",
        error_category="unknown",
        retryable=False,
    )
