"""CRUD endpoints for posts under ``/api/posts``.

Single-post reads are wrapped in :class:`Resource` with an ``all-posts``
link back to the collection; the collection itself carries no links.
"""

import logging
import uuid
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from post_api.core.errors import normalize_db_error
from post_api.core.logging import log_event
from post_api.db.session import get_db
from post_api.models.post import ALL_POSTS_REL, PostCreate, PostView, Resource, UserView
from post_api.services import post_service
from post_api.services.post_repository import DatabaseLockedError, SqlAlchemyPostStore
from post_api.services.post_service import (
    OwnerNotFoundError,
    PostNotFoundError,
    PostValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts")


def _all_posts_links(request: Request) -> dict[str, str]:
    return {ALL_POSTS_REL: str(request.url_for("list_posts"))}


@router.post("", status_code=201, response_class=Response)
def add_post(
    body: PostCreate, request: Request, db: Session = Depends(get_db),
) -> Response:
    """Create a post and point ``Location`` at it."""
    correlation_id = str(uuid.uuid4())
    store = SqlAlchemyPostStore(db)

    try:
        owner = post_service.resolve_owner(db, body.user_id)
    except PostValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    try:
        record = post_service.save(store, body, owner)
        db.commit()
    except (SQLAlchemyError, DatabaseLockedError) as exc:
        db.rollback()
        error = normalize_db_error(
            exc, operation="add_post", correlation_id=correlation_id,
        )
        raise HTTPException(status_code=error.http_status, detail=error.user_message)
    log_event(
        logger, "info", "post_created",
        uuid=record.uuid,
        owner=record.user_id or "none",
    )

    location = request.url_for("get_post", post_id=record.uuid)
    return Response(status_code=201, headers={"Location": str(location)})


@router.get("", response_model=list[PostView])
def list_posts(db: Session = Depends(get_db)) -> list[PostView]:
    """Return every post, projected onto the public fields."""
    store = SqlAlchemyPostStore(db)
    return [post_service.to_post_view(p) for p in post_service.find_all(store)]


@router.get("/{post_id}", response_model=Resource[PostView])
def get_post(
    post_id: UUID, request: Request, db: Session = Depends(get_db),
) -> Resource[PostView]:
    store = SqlAlchemyPostStore(db)
    try:
        record = post_service.get_post_or_raise(store, post_id)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Resource[PostView](
        data=post_service.to_post_view(record),
        links=_all_posts_links(request),
    )


@router.get("/{post_id}/owner", response_model=Resource[UserView])
def get_post_owner(
    post_id: UUID, request: Request, db: Session = Depends(get_db),
) -> Resource[UserView]:
    """Return the user that owns a post."""
    store = SqlAlchemyPostStore(db)
    try:
        owner = post_service.get_owner_or_raise(store, post_id)
    except (PostNotFoundError, OwnerNotFoundError) as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Resource[UserView](
        data=post_service.to_user_view(owner),
        links=_all_posts_links(request),
    )


@router.delete("/{post_id}", status_code=204, response_class=Response)
def delete_post(post_id: UUID, db: Session = Depends(get_db)) -> Response:
    """Delete a post."""
    correlation_id = str(uuid.uuid4())
    store = SqlAlchemyPostStore(db)
    try:
        post_service.delete_by_id(store, post_id)
        db.commit()
    except PostNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except (SQLAlchemyError, DatabaseLockedError) as exc:
        db.rollback()
        error = normalize_db_error(
            exc, operation="delete_post", correlation_id=correlation_id,
        )
        raise HTTPException(status_code=error.http_status, detail=error.user_message)
    log_event(logger, "info", "post_deleted", uuid=post_id)
    return Response(status_code=204)
