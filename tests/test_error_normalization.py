"""Tests for error normalization of post writes, validation and unknown failures."""

import logging

import pytest
from post_api.core.errors import (
    NormalizedError,
    normalize_db_error,
    normalize_unknown_error,
    normalize_validation_error,
)
from post_api.services.post_repository import DatabaseLockedError
from sqlalchemy.exc import IntegrityError, OperationalError

# ---------------------------------------------------------------------------
# Post write failures
# ---------------------------------------------------------------------------


class TestDbErrorNormalization:
    def test_locked_store_error_is_retryable_503(self) -> None:
        exc = DatabaseLockedError("Database is locked during 'insert_post'.")
        error = normalize_db_error(exc, operation="add_post")
        assert error.retryable is True
        assert error.http_status == 503
        assert error.error_category == "db_locked"
        assert error.user_message.startswith("Could not create the post")

    def test_busy_commit_is_retryable(self) -> None:
        exc = OperationalError("COMMIT", params={}, orig=Exception("database is busy"))
        error = normalize_db_error(exc, operation="delete_post")
        assert error.http_status == 503
        assert "delete the post" in error.user_message

    def test_other_store_error_is_500(self) -> None:
        exc = IntegrityError("INSERT ...", params={}, orig=Exception("FOREIGN KEY constraint failed"))
        error = normalize_db_error(exc, operation="add_post")
        assert error.http_status == 500
        assert error.retryable is False
        assert error.error_category == "db"

    def test_store_detail_not_in_user_message(self) -> None:
        exc = IntegrityError("INSERT ...", params={}, orig=Exception("FOREIGN KEY constraint failed"))
        error = normalize_db_error(exc, operation="add_post")
        assert "FOREIGN KEY" not in error.user_message

    def test_unknown_operation_named_verbatim(self) -> None:
        error = normalize_db_error(Exception("boom"), operation="reindex")
        assert error.user_message == "Could not reindex because of a database error."

    def test_logs_operation_category_and_correlation(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        exc = DatabaseLockedError("database is locked")
        with caplog.at_level(logging.ERROR):
            normalize_db_error(exc, operation="delete_post", correlation_id="corr-123")
        assert "db_write_failed" in caplog.text
        assert "operation=delete_post" in caplog.text
        assert "error_category=db_locked" in caplog.text
        assert "correlation_id=corr-123" in caplog.text

    def test_default_correlation(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            normalize_db_error(Exception("fail"), operation="add_post")
        assert "correlation_id=N/A" in caplog.text


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------


class TestValidationNormalization:
    def test_single_error(self) -> None:
        error = normalize_validation_error(["body.title: Field required"])
        assert error.error_category == "validation"
        assert error.retryable is False
        assert error.http_status == 400
        assert "body.title: Field required" in error.user_message

    def test_multiple_errors_joined(self) -> None:
        error = normalize_validation_error(["title missing", "bad uuid"])
        assert error.user_message == "Validation failed: title missing; bad uuid"


# ---------------------------------------------------------------------------
# Unknown errors
# ---------------------------------------------------------------------------


class TestUnknownErrorNormalization:
    def test_generic_safe_message(self) -> None:
        exc = RuntimeError("something broke internally")
        error = normalize_unknown_error(exc, operation="test")
        assert error.user_message == "An unexpected error occurred."
        assert error.error_category == "unknown"
        assert error.http_status == 500

    def test_unknown_error_logged(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        exc = RuntimeError("internal detail")
        with caplog.at_level(logging.ERROR):
            normalize_unknown_error(exc, operation="GET /api/posts")
        assert "unknown_error" in caplog.text
        assert "RuntimeError: internal detail" in caplog.text
        assert "operation=GET /api/posts" in caplog.text


class TestNormalizedErrorStructure:
    def test_is_frozen_dataclass(self) -> None:
        error = NormalizedError(
            user_message="test",
            error_category="db",
            retryable=True,
        )
        with pytest.raises(AttributeError):
            error.user_message = "changed"  # type: ignore[misc]

    def test_default_http_status(self) -> None:
        error = NormalizedError(
            user_message="test",
            error_category="unknown",
            retryable=False,
        )
        assert error.http_status == 500
