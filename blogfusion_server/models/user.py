# blogfusion_server/models/user.py

from pydantic import BaseModel, Field


# -------------------------------
# User Records
# -------------------------------

class PublicUser(BaseModel):
    """
    User as exposed to clients and embedded in post joins.
    Never carries the password hash.
    """
    id: str
    username: str
    name: str
    bio: str | None = None
    avatar: str | None = None


class User(PublicUser):
    """
    Stored user record.
    """
    hashed_password: str

    def to_public(self) -> PublicUser:
        return PublicUser(**self.model_dump(exclude={"hashed_password"}))


class UserCreate(BaseModel):
    """
    Candidate handed to UserRepository.create_user.
    The password is already hashed by the caller.
    """
    username: str
    name: str
    hashed_password: str
    bio: str | None = None
    avatar: str | None = None


# -------------------------------
# Auth Request / Response Schemas
# -------------------------------

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)
    name: str = Field(..., min_length=1, max_length=100)
    bio: str | None = None
    avatar: str | None = None


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthResponse(BaseModel):
    user: PublicUser
    token: str


class Token(BaseModel):
    access_token: str
    token_type: str
