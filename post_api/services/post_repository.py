"""Persistence interface for posts.

:class:`PostStore` is the whole surface the service layer relies on:
insert, find-by-id, find-all and delete-by-id.  :class:`SqlAlchemyPostStore`
implements it over a caller-supplied SQLAlchemy ``Session`` so that
transaction boundaries remain under the caller's control.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from sqlalchemy import literal_column, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from post_api.core.logging import log_event
from post_api.models.post_record import PostRecord
from post_api.models.user_record import UserRecord  # noqa: F401  (mapper registry)

logger = logging.getLogger(__name__)


class DatabaseLockedError(Exception):
    """Raised when the database is locked by another process (retryable)."""


def _handle_operational_error(exc: OperationalError, operation: str) -> None:
    """Check for database-locked errors and raise a categorized exception."""
    msg = str(exc).lower()
    if "locked" in msg or "busy" in msg:
        logger.warning(
            "db_write_failed: operation=%s reason=database_locked (retryable)",
            operation,
        )
        raise DatabaseLockedError(
            f"Database is locked during '{operation}'. "
            f"Another process may be writing. Please retry."
        ) from exc
    raise exc


@runtime_checkable
class PostStore(Protocol):
    """Keyed store for posts."""

    def insert(self, post: PostRecord) -> PostRecord: ...

    def find_by_id(self, post_id: str) -> PostRecord | None: ...

    def find_all(self) -> list[PostRecord]: ...

    def delete_by_id(self, post_id: str) -> None: ...


class SqlAlchemyPostStore:
    """:class:`PostStore` backed by the ``posts`` table."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def insert(self, post: PostRecord) -> PostRecord:
        """Add *post* and flush so the generated uuid is populated."""
        self._db.add(post)
        try:
            self._db.flush()
        except OperationalError as exc:
            _handle_operational_error(exc, "insert_post")
        logger.info(
            "post_inserted: uuid=%s title_len=%d content_len=%d",
            post.uuid,
            len(post.title),
            len(post.content),
        )
        return post

    def find_by_id(self, post_id: str) -> PostRecord | None:
        try:
            return self._db.get(PostRecord, post_id)
        except SQLAlchemyError as exc:
            log_event(
                logger, "error", "db_read_failed",
                operation="find_post", uuid=post_id, detail=exc,
            )
            raise

    def find_all(self) -> list[PostRecord]:
        # rowid follows insertion order on SQLite
        stmt = select(PostRecord).order_by(literal_column("posts.rowid"))
        try:
            return list(self._db.scalars(stmt).all())
        except SQLAlchemyError as exc:
            log_event(
                logger, "error", "db_read_failed",
                operation="list_posts", detail=exc,
            )
            raise

    def delete_by_id(self, post_id: str) -> None:
        """Delete the post with *post_id*; a missing id is a no-op."""
        record = self._db.get(PostRecord, post_id)
        if record is None:
            return
        self._db.delete(record)
        try:
            self._db.flush()
        except OperationalError as exc:
            _handle_operational_error(exc, "delete_post")
        logger.info("post_removed: uuid=%s", post_id)
