# blogfusion_server/storage/sql.py

import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from threading import Lock

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from blogfusion_server.core.errors import ConflictError, NotFoundError
from blogfusion_server.models import Post, PostCreate, PostWithAuthor, PublicUser, User, UserCreate
from .base import PostRepository, UserRepository, check_update_fields, merge_update
from .tables import PostRow, UserRow


def _aware(value: datetime) -> datetime:
    # SQLite hands datetimes back without tzinfo; everything is stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        username=row.username,
        name=row.name,
        hashed_password=row.hashed_password,
        bio=row.bio,
        avatar=row.avatar,
    )


def _to_post(row: PostRow) -> Post:
    return Post(
        id=row.id,
        author_id=row.author_id,
        title=row.title,
        content=row.content,
        excerpt=row.excerpt,
        cover_image=row.cover_image,
        category=row.category,
        tags=list(row.tags or []),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _to_joined(row: PostRow, author: UserRow) -> PostWithAuthor:
    return PostWithAuthor(
        **_to_post(row).model_dump(),
        author=PublicUser(**_to_user(author).model_dump(exclude={"hashed_password"})),
    )


class SqlUserRepository(UserRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._lock = Lock()

    def create_user(self, candidate: UserCreate) -> User:
        with self._lock, self._session_factory() as session:
            taken = session.scalar(select(UserRow.id).where(UserRow.username == candidate.username))
            if taken is not None:
                raise ConflictError("Username already exists")

            row = UserRow(id=str(uuid.uuid4()), **candidate.model_dump())
            session.add(row)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise ConflictError("Username already exists")
            return _to_user(row)

    def get_user_by_id(self, user_id: str) -> User | None:
        with self._session_factory() as session:
            row = session.get(UserRow, user_id)
            return _to_user(row) if row else None

    def get_user_by_username(self, username: str) -> User | None:
        with self._session_factory() as session:
            row = session.scalar(select(UserRow).where(UserRow.username == username))
            return _to_user(row) if row else None

    def __len__(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(UserRow))


class SqlPostRepository(PostRepository):
    """
    Post store backed by SQLAlchemy. Joins are done in SQL against the users
    table, so it must share its database with a SqlUserRepository.
    """

    def __init__(self, users: UserRepository, session_factory: sessionmaker, **kwargs):
        super().__init__(users, **kwargs)
        self._session_factory = session_factory
        self._lock = Lock()

    def _joined_query(self):
        return (
            select(PostRow, UserRow)
            .join(UserRow, UserRow.id == PostRow.author_id)
            .order_by(PostRow.created_at.desc(), PostRow.id)
        )

    def create(self, post: PostCreate, author_id: str) -> Post:
        with self._lock, self._session_factory() as session:
            now = self.clock()
            row = PostRow(
                id=str(uuid.uuid4()),
                author_id=author_id,
                created_at=now,
                updated_at=now,
                **post.model_dump(),
            )
            session.add(row)
            session.commit()
            return _to_post(row)

    def get_by_id(self, post_id: str) -> Post | None:
        with self._session_factory() as session:
            row = session.get(PostRow, post_id)
            return _to_post(row) if row else None

    def get_with_author(self, post_id: str) -> PostWithAuthor | None:
        with self._session_factory() as session:
            result = session.execute(self._joined_query().where(PostRow.id == post_id)).first()
            return _to_joined(*result) if result else None

    def list_all(self) -> list[PostWithAuthor]:
        with self._session_factory() as session:
            return [_to_joined(post, author) for post, author in session.execute(self._joined_query())]

    def list_by_author(self, author_id: str) -> list[PostWithAuthor]:
        with self._session_factory() as session:
            query = self._joined_query().where(PostRow.author_id == author_id)
            return [_to_joined(post, author) for post, author in session.execute(query)]

    def update(self, post_id: str, fields: Mapping) -> Post:
        changes = check_update_fields(fields)
        with self._lock, self._session_factory() as session:
            row = session.get(PostRow, post_id)
            if row is None:
                raise NotFoundError("Post not found")

            merged = merge_update(_to_post(row), changes, self.clock())
            for field in changes:
                setattr(row, field, getattr(merged, field))
            row.updated_at = merged.updated_at
            session.commit()
            return merged

    def delete(self, post_id: str) -> bool:
        with self._lock, self._session_factory() as session:
            row = session.get(PostRow, post_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True
