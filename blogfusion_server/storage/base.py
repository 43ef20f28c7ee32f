# blogfusion_server/storage/base.py

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable

from pydantic import ValidationError as SchemaError

from blogfusion_server.core.errors import ValidationError
from blogfusion_server.models import (
    UPDATABLE_FIELDS,
    Post,
    PostCreate,
    PostWithAuthor,
    User,
    UserCreate,
)


Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def advance(previous: datetime, now: datetime) -> datetime:
    """
    Returns a modification time strictly later than `previous`.
    Two updates inside one clock tick still move forward by a microsecond.
    """
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


def check_update_fields(fields: Mapping) -> dict:
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
    return dict(fields)


def merge_update(existing: Post, changes: Mapping, now: datetime) -> Post:
    """
    Applies already-checked changes to a post and stamps the modification time.
    Values that do not fit the post schema raise ValidationError.
    """
    try:
        return Post.model_validate({
            **existing.model_dump(),
            **changes,
            "updated_at": advance(existing.updated_at, now),
        })
    except SchemaError as e:
        raise ValidationError(str(e))


# -------------------------------
# Repository Interfaces
# -------------------------------

class UserRepository(ABC):
    """
    Identity store. Users are created once and never updated or deleted.
    """

    @abstractmethod
    def create_user(self, candidate: UserCreate) -> User:
        """Store a new user under a fresh id. Raises ConflictError on a taken username."""

    @abstractmethod
    def get_user_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...


class PostRepository(ABC):
    """
    Content repository.

    Joins posts to their author through the UserRepository it was built with.
    Posts whose author cannot be resolved are left out of joined views.
    Ownership is not checked here; that is the handler's job.
    """

    def __init__(self, users: UserRepository, clock: Clock = utcnow):
        self.users = users
        self.clock = clock

    @abstractmethod
    def create(self, post: PostCreate, author_id: str) -> Post:
        ...

    @abstractmethod
    def get_by_id(self, post_id: str) -> Post | None:
        ...

    @abstractmethod
    def get_with_author(self, post_id: str) -> PostWithAuthor | None:
        ...

    @abstractmethod
    def list_all(self) -> list[PostWithAuthor]:
        """Every post with a resolvable author, newest first."""

    @abstractmethod
    def list_by_author(self, author_id: str) -> list[PostWithAuthor]:
        """Posts by one author, newest first. Empty if the author is unknown."""

    @abstractmethod
    def update(self, post_id: str, fields: Mapping) -> Post:
        """Merge the supplied fields. Raises NotFoundError if the post is missing."""

    @abstractmethod
    def delete(self, post_id: str) -> bool:
        """True if a post was removed, False if there was nothing to remove."""

    def _join(self, post: Post) -> PostWithAuthor | None:
        author = self.users.get_user_by_id(post.author_id)
        if author is None:
            return None
        return PostWithAuthor(**post.model_dump(), author=author.to_public())


@dataclass
class Storage:
    """
    The pair of repositories owned by one running application.
    """
    users: UserRepository
    posts: PostRepository
    on_close: list[Callable[[], None]] = field(default_factory=list)

    def close(self):
        for callback in self.on_close:
            callback()
