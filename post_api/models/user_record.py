"""SQLAlchemy ORM model for the users table."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from post_api.db.base import Base

if TYPE_CHECKING:
    from post_api.models.post_record import PostRecord


class UserRecord(Base):
    """Owner of posts. Only looked up by reference from this service."""

    __tablename__ = "users"

    uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    posts: Mapped[list[PostRecord]] = relationship("PostRecord", back_populates="user")
