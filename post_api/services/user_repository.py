"""Lookups for post owners. Users are managed elsewhere; this is read-mostly."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from post_api.models.post_record import PostRecord  # noqa: F401  (mapper registry)
from post_api.models.user_record import UserRecord

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> UserRecord | None:
    """Fetch a user by uuid, or ``None`` if absent."""
    return db.get(UserRecord, user_id)


def create_user(db: Session, *, name: str) -> UserRecord:
    """Insert a user and flush to obtain its uuid. Used for seeding."""
    record = UserRecord(name=name)
    db.add(record)
    db.flush()
    logger.info("user_created: uuid=%s", record.uuid)
    return record
