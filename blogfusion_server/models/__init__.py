# blogfusion_server/models/__init__.py

from .user import (
    PublicUser,
    User,
    UserCreate,
    RegisterRequest,
    LoginRequest,
    AuthResponse,
    Token,
)
from .post import (
    UPDATABLE_FIELDS,
    Post,
    PostWithAuthor,
    PostCreate,
    PostUpdate,
)
from .assist import AIWritingRequest, AIWritingResponse, WRITING_ACTIONS
