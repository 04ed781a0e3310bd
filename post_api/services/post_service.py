"""Post operations on top of a :class:`PostStore`.

Routes call these functions rather than the store directly; they own the
not-found rules and the record → view projection.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from post_api.core.logging import log_event
from post_api.models.post import PostCreate, PostView, UserView
from post_api.models.post_record import PostRecord
from post_api.models.user_record import UserRecord
from post_api.services.post_repository import PostStore
from post_api.services.user_repository import get_user

logger = logging.getLogger(__name__)


class PostNotFoundError(Exception):
    """Raised when a post cannot be found by uuid."""


class OwnerNotFoundError(Exception):
    """Raised when a post exists but has no owning user."""


class PostValidationError(Exception):
    """Raised when a create payload references data that does not exist."""


def to_user_view(user: UserRecord) -> UserView:
    return UserView(uuid=UUID(user.uuid), name=user.name)


def to_post_view(post: PostRecord) -> PostView:
    """Project a row onto the public post fields."""
    return PostView(
        uuid=UUID(post.uuid),
        title=post.title,
        summary=post.summary,
        content=post.content,
        user=to_user_view(post.user) if post.user is not None else None,
    )


def resolve_owner(db: Session, user_id: UUID | None) -> UserRecord | None:
    """Return the referenced user, ``None`` when no owner was given.

    Raises:
        PostValidationError: If *user_id* is set but unknown.
    """
    if user_id is None:
        return None
    user = get_user(db, str(user_id))
    if user is None:
        raise PostValidationError(f"User with UUID: {user_id} does not exist.")
    return user


def save(store: PostStore, payload: PostCreate, owner: UserRecord | None = None) -> PostRecord:
    """Stage a new post; the store assigns the uuid. The caller commits."""
    return store.insert(
        PostRecord(
            title=payload.title,
            summary=payload.summary,
            content=payload.content,
            user=owner,
        )
    )


def find_all(store: PostStore) -> list[PostRecord]:
    return store.find_all()


def find_by_id(store: PostStore, post_id: UUID) -> PostRecord | None:
    return store.find_by_id(str(post_id))


def get_post_or_raise(store: PostStore, post_id: UUID) -> PostRecord:
    """Fetch a post by uuid.

    Raises:
        PostNotFoundError: If no post with *post_id* exists.
    """
    record = find_by_id(store, post_id)
    if record is None:
        log_event(logger, "info", "post_not_found", uuid=post_id)
        raise PostNotFoundError(f"Post with UUID: {post_id} is not found.")
    return record


def get_owner_or_raise(store: PostStore, post_id: UUID) -> UserRecord:
    """Fetch the user that owns a post.

    Raises:
        PostNotFoundError: If no post with *post_id* exists.
        OwnerNotFoundError: If the post has no owner.
    """
    record = get_post_or_raise(store, post_id)
    if record.user is None:
        raise OwnerNotFoundError(f"Post with UUID: {post_id} has no owner.")
    return record.user


def delete_by_id(store: PostStore, post_id: UUID) -> None:
    """Remove a post.

    Raises:
        PostNotFoundError: If no post with *post_id* exists.
    """
    if find_by_id(store, post_id) is None:
        log_event(logger, "info", "post_not_found", uuid=post_id)
        raise PostNotFoundError(f"Post with UUID: {post_id} does not exist.")
    store.delete_by_id(str(post_id))
