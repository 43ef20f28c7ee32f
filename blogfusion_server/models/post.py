# blogfusion_server/models/post.py

from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from .user import PublicUser


# Fields an author may change after creation
UPDATABLE_FIELDS = frozenset({"title", "content", "excerpt", "cover_image", "category", "tags"})


def _clean_tags(value):
    if value is None:
        return value
    if isinstance(value, str):
        value = value.split(",")
    return [tag.strip() for tag in value if isinstance(tag, str) and tag.strip()]


class Post(BaseModel):
    id: str
    author_id: str
    title: str
    content: str
    excerpt: str | None = None
    cover_image: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class PostWithAuthor(Post):
    author: PublicUser


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    excerpt: str | None = None
    cover_image: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, value):
        return _clean_tags(value)


class PostUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied;
    use model_dump(exclude_unset=True) to get them.
    """
    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1)
    excerpt: str | None = None
    cover_image: str | None = None
    category: str | None = None
    tags: list[str] | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, value):
        return _clean_tags(value)

    @field_validator("title", "content", "tags")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value
