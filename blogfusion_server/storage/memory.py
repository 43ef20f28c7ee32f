# blogfusion_server/storage/memory.py

import uuid
from collections.abc import Mapping
from threading import Lock

from blogfusion_server.core.errors import ConflictError, NotFoundError
from blogfusion_server.models import Post, PostCreate, PostWithAuthor, User, UserCreate
from .base import PostRepository, UserRepository, check_update_fields, merge_update


class MemoryUserRepository(UserRepository):

    def __init__(self):
        self._users: dict[str, User] = {}
        self._ids_by_username: dict[str, str] = {}
        self._lock = Lock()

    def create_user(self, candidate: UserCreate) -> User:
        with self._lock:
            if candidate.username in self._ids_by_username:
                raise ConflictError("Username already exists")
            user_id = str(uuid.uuid4())
            while user_id in self._users:
                user_id = str(uuid.uuid4())
            user = User(id=user_id, **candidate.model_dump())
            self._users[user_id] = user
            self._ids_by_username[user.username] = user_id
            return user.model_copy()

    def get_user_by_id(self, user_id: str) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            user_id = self._ids_by_username.get(username)
            return self._users[user_id].model_copy() if user_id else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)


class MemoryPostRepository(PostRepository):
    """
    Dict-backed post store. Insertion order is kept, so posts created in the
    same clock tick always come out of a listing in the same relative order.
    """

    def __init__(self, users: UserRepository, **kwargs):
        super().__init__(users, **kwargs)
        self._posts: dict[str, Post] = {}
        self._lock = Lock()

    def create(self, post: PostCreate, author_id: str) -> Post:
        with self._lock:
            post_id = str(uuid.uuid4())
            while post_id in self._posts:
                post_id = str(uuid.uuid4())
            now = self.clock()
            record = Post(
                id=post_id,
                author_id=author_id,
                created_at=now,
                updated_at=now,
                **post.model_dump(),
            )
            self._posts[post_id] = record
            return record.model_copy(deep=True)

    def get_by_id(self, post_id: str) -> Post | None:
        with self._lock:
            post = self._posts.get(post_id)
            return post.model_copy(deep=True) if post else None

    def get_with_author(self, post_id: str) -> PostWithAuthor | None:
        with self._lock:
            post = self._posts.get(post_id)
            return self._join(post) if post else None

    def list_all(self) -> list[PostWithAuthor]:
        with self._lock:
            joined = [self._join(post) for post in self._posts.values()]
        return _newest_first([p for p in joined if p is not None])

    def list_by_author(self, author_id: str) -> list[PostWithAuthor]:
        author = self.users.get_user_by_id(author_id)
        if author is None:
            return []
        public = author.to_public()
        with self._lock:
            joined = [
                PostWithAuthor(**post.model_dump(), author=public)
                for post in self._posts.values()
                if post.author_id == author_id
            ]
        return _newest_first(joined)

    def update(self, post_id: str, fields: Mapping) -> Post:
        changes = check_update_fields(fields)
        with self._lock:
            existing = self._posts.get(post_id)
            if existing is None:
                raise NotFoundError("Post not found")
            merged = merge_update(existing, changes, self.clock())
            self._posts[post_id] = merged
            return merged.model_copy(deep=True)

    def delete(self, post_id: str) -> bool:
        with self._lock:
            return self._posts.pop(post_id, None) is not None


def _newest_first(posts: list[PostWithAuthor]) -> list[PostWithAuthor]:
    # sorted() is stable, so equal timestamps keep insertion order
    return sorted(posts, key=lambda p: p.created_at, reverse=True)
