"""SQLAlchemy ORM model for the posts table."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from post_api.db.base import Base

if TYPE_CHECKING:
    from post_api.models.user_record import UserRecord


class PostRecord(Base):
    """A post; ``uuid`` is assigned on insert and never changes."""

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_user_id", "user_id"),
    )

    uuid: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str] = mapped_column(String(1000), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.uuid", ondelete="SET NULL"), nullable=True,
    )

    user: Mapped[UserRecord | None] = relationship("UserRecord", back_populates="posts")
