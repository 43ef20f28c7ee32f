# blogfusion_server/api/posts.py

import logging
from fastapi import APIRouter, Depends
from blogfusion_server.api.auth import get_current_user
from blogfusion_server.core.errors import NotFoundError, UnauthorizedError
from blogfusion_server.database import get_storage
from blogfusion_server.models import Post, PostCreate, PostUpdate, PostWithAuthor, User
from blogfusion_server.storage import Storage


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts")


def get_owned_post(post_id: str, current_user: User, storage: Storage) -> Post:
    """
    Loads a post and checks the caller wrote it.
    The repository never checks ownership; this is the one place that does.
    """
    post = storage.posts.get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if post.author_id != current_user.id:
        logger.warning("User id=%s tried to modify post id=%s owned by %s", current_user.id, post_id, post.author_id)
        raise UnauthorizedError()
    return post


# -------------------------------
# Feed Endpoints
# -------------------------------

@router.get("", response_model=list[PostWithAuthor])
def list_posts(storage: Storage = Depends(get_storage)):
    return storage.posts.list_all()


@router.get("/my", response_model=list[PostWithAuthor])
def list_my_posts(current_user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return storage.posts.list_by_author(current_user.id)


@router.get("/{post_id}", response_model=PostWithAuthor)
def read_post(post_id: str, storage: Storage = Depends(get_storage)):
    post = storage.posts.get_with_author(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


# -------------------------------
# Authoring Endpoints
# -------------------------------

@router.post("", response_model=Post)
def create_post(
    body: PostCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    post = storage.posts.create(body, current_user.id)
    logger.info("User id=%s created post id=%s", current_user.id, post.id)
    return post


@router.patch("/{post_id}", response_model=Post)
def update_post(
    post_id: str,
    body: PostUpdate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    get_owned_post(post_id, current_user, storage)
    changes = body.model_dump(exclude_unset=True)
    post = storage.posts.update(post_id, changes)
    logger.info("User id=%s updated post id=%s fields=%s", current_user.id, post_id, sorted(changes))
    return post


@router.delete("/{post_id}")
def delete_post(
    post_id: str,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    get_owned_post(post_id, current_user, storage)
    if not storage.posts.delete(post_id):
        raise NotFoundError("Post not found")
    logger.info("User id=%s deleted post id=%s", current_user.id, post_id)
    return {"message": "Post deleted successfully"}
