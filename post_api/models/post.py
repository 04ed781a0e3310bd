"""Pydantic request payloads and allow-list response views for posts."""

from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

ALL_POSTS_REL = "all-posts"

T = TypeVar("T")


class PostCreate(BaseModel):
    """Body of ``POST /api/posts``. The uuid is always generated server-side."""

    title: str
    summary: str
    content: str
    user_id: UUID | None = None


class UserView(BaseModel):
    """Public fields of a post owner."""

    uuid: UUID
    name: str


class PostView(BaseModel):
    """Public fields of a post. Nothing outside this list is serialized."""

    uuid: UUID
    title: str
    summary: str
    content: str
    user: UserView | None = None


class Resource(BaseModel, Generic[T]):
    """A single resource plus named hypermedia links (``rel -> url``)."""

    data: T
    links: dict[str, str] = Field(default_factory=dict)
