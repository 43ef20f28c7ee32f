# blogfusion_server/core/errors.py

from fastapi import Request, status
from fastapi.responses import JSONResponse


# -------------------------------
# Error Taxonomy
# -------------------------------

class BlogFusionError(Exception):
    """
    Base class for every rejected operation.
    Each subclass carries the HTTP status it maps to at the API boundary.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BlogFusionError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(BlogFusionError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class NotFoundError(BlogFusionError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UnauthenticatedError(BlogFusionError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class UnauthorizedError(BlogFusionError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class UpstreamError(BlogFusionError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "AI assistance failed"


# -------------------------------
# FastAPI Integration
# -------------------------------

async def handle_blogfusion_error(request: Request, exc: BlogFusionError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )
