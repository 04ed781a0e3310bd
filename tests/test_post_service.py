"""Tests for post service rules: not-found handling, owner lookup, views."""

import uuid

import pytest
from post_api.db.base import Base
from post_api.models.post import PostCreate, PostView
from post_api.services import post_service
from post_api.services.post_repository import SqlAlchemyPostStore
from post_api.services.post_service import (
    OwnerNotFoundError,
    PostNotFoundError,
    PostValidationError,
)
from post_api.services.user_repository import create_user
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker


@pytest.fixture()
def db() -> Session:  # type: ignore[misc]
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db: Session) -> SqlAlchemyPostStore:
    return SqlAlchemyPostStore(db)


_PAYLOAD = PostCreate(title="A", summary="B", content="C")


class TestSave:
    def test_save_then_find(self, db: Session, store: SqlAlchemyPostStore) -> None:
        record = post_service.save(store, _PAYLOAD)
        db.commit()

        found = post_service.get_post_or_raise(store, uuid.UUID(record.uuid))
        assert (found.title, found.summary, found.content) == ("A", "B", "C")
        assert found.user is None

    def test_save_with_owner(self, db: Session, store: SqlAlchemyPostStore) -> None:
        user = create_user(db, name="Ada")
        owner = post_service.resolve_owner(db, uuid.UUID(user.uuid))
        record = post_service.save(store, _PAYLOAD, owner)
        db.commit()
        assert record.user_id == user.uuid


class TestResolveOwner:
    def test_none_means_no_owner(self, db: Session) -> None:
        assert post_service.resolve_owner(db, None) is None

    def test_unknown_user_rejected(self, db: Session) -> None:
        missing = uuid.uuid4()
        with pytest.raises(PostValidationError, match=str(missing)):
            post_service.resolve_owner(db, missing)


class TestNotFound:
    def test_get_missing_raises_with_uuid(self, store: SqlAlchemyPostStore) -> None:
        missing = uuid.uuid4()
        with pytest.raises(PostNotFoundError, match=f"Post with UUID: {missing} is not found."):
            post_service.get_post_or_raise(store, missing)

    def test_find_by_id_missing_is_none(self, store: SqlAlchemyPostStore) -> None:
        assert post_service.find_by_id(store, uuid.uuid4()) is None

    def test_delete_missing_raises(self, store: SqlAlchemyPostStore) -> None:
        missing = uuid.uuid4()
        with pytest.raises(PostNotFoundError, match="does not exist"):
            post_service.delete_by_id(store, missing)

    def test_delete_then_get_raises(self, db: Session, store: SqlAlchemyPostStore) -> None:
        record = post_service.save(store, _PAYLOAD)
        db.commit()
        post_id = uuid.UUID(record.uuid)

        post_service.delete_by_id(store, post_id)
        db.commit()

        with pytest.raises(PostNotFoundError):
            post_service.get_post_or_raise(store, post_id)


class TestOwner:
    def test_missing_post_raises_not_found(self, store: SqlAlchemyPostStore) -> None:
        with pytest.raises(PostNotFoundError):
            post_service.get_owner_or_raise(store, uuid.uuid4())

    def test_post_without_owner(self, db: Session, store: SqlAlchemyPostStore) -> None:
        record = post_service.save(store, _PAYLOAD)
        db.commit()
        with pytest.raises(OwnerNotFoundError, match="has no owner"):
            post_service.get_owner_or_raise(store, uuid.UUID(record.uuid))

    def test_returns_owner(self, db: Session, store: SqlAlchemyPostStore) -> None:
        user = create_user(db, name="Grace")
        record = post_service.save(store, _PAYLOAD, user)
        db.commit()
        owner = post_service.get_owner_or_raise(store, uuid.UUID(record.uuid))
        assert owner.uuid == user.uuid


class TestViews:
    def test_post_view_fields(self, db: Session, store: SqlAlchemyPostStore) -> None:
        user = create_user(db, name="Ada")
        record = post_service.save(store, _PAYLOAD, user)
        db.commit()

        view = post_service.to_post_view(record)

        assert isinstance(view, PostView)
        dumped = view.model_dump(mode="json")
        assert set(dumped) == {"uuid", "title", "summary", "content", "user"}
        assert dumped["user"] == {"uuid": user.uuid, "name": "Ada"}

    def test_post_view_without_owner(self, db: Session, store: SqlAlchemyPostStore) -> None:
        record = post_service.save(store, _PAYLOAD)
        db.commit()
        assert post_service.to_post_view(record).user is None
