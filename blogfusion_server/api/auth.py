# blogfusion_server/api/auth.py

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm, OAuth2PasswordBearer
from blogfusion_server.core.errors import UnauthenticatedError
from blogfusion_server.core.security import PasswordHasher, TokenCodec
from blogfusion_server.database import get_storage
from blogfusion_server.models import (
    AuthResponse,
    LoginRequest,
    PublicUser,
    RegisterRequest,
    Token,
    User,
    UserCreate,
)
from blogfusion_server.storage import Storage


logger = logging.getLogger(__name__)

router = APIRouter()

# a missing header is rejected in get_current_user
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def authenticate_user(storage: Storage, hasher: PasswordHasher, username: str, password: str) -> User:
    user = storage.users.get_user_by_username(username)
    if not user or not hasher.verify(password, user.hashed_password):
        logger.warning("Failed login attempt for username=%r", username)
        raise UnauthenticatedError("Invalid credentials")
    return user


# -------------------------------
# Access Gate
# -------------------------------

def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    codec: TokenCodec = Depends(get_token_codec),
    storage: Storage = Depends(get_storage),
) -> User:
    """
    Resolves the bearer token to a stored user.
    Missing, malformed, expired, foreign-signed tokens and tokens naming an
    unknown user are all rejected with the same UnauthenticatedError.
    """
    if not token:
        logger.debug("Rejected request without bearer token")
        raise UnauthenticatedError()

    user_id = codec.decode_access_token(token)
    user = storage.users.get_user_by_id(user_id)
    if user is None:
        logger.debug("Rejected token for unknown user id=%s", user_id)
        raise UnauthenticatedError()
    return user


# -------------------------------
# Auth Endpoints
# -------------------------------

@router.post("/api/auth/register", response_model=AuthResponse)
def register(
    body: RegisterRequest,
    storage: Storage = Depends(get_storage),
    hasher: PasswordHasher = Depends(get_hasher),
    codec: TokenCodec = Depends(get_token_codec),
):
    user = storage.users.create_user(UserCreate(
        username=body.username,
        name=body.name,
        hashed_password=hasher.hash(body.password),
        bio=body.bio,
        avatar=body.avatar,
    ))
    logger.info("Registered user id=%s username=%r", user.id, user.username)
    return {"user": user.to_public(), "token": codec.create_access_token(user.id)}


@router.post("/api/auth/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    storage: Storage = Depends(get_storage),
    hasher: PasswordHasher = Depends(get_hasher),
    codec: TokenCodec = Depends(get_token_codec),
):
    user = authenticate_user(storage, hasher, body.username, body.password)
    logger.info("User id=%s logged in", user.id)
    return {"user": user.to_public(), "token": codec.create_access_token(user.id)}


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    storage: Storage = Depends(get_storage),
    hasher: PasswordHasher = Depends(get_hasher),
    codec: TokenCodec = Depends(get_token_codec),
):
    user = authenticate_user(storage, hasher, form_data.username, form_data.password)
    return {"access_token": codec.create_access_token(user.id), "token_type": "bearer"}


@router.get("/api/auth/me", response_model=PublicUser)
def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user.to_public()
