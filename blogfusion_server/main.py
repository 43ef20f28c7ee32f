# blogfusion_server/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from blogfusion_server.api import assist, auth, posts
from blogfusion_server.config import Settings, configure_logging
from blogfusion_server.core.assistant import WritingAssistant
from blogfusion_server.core.errors import BlogFusionError, handle_blogfusion_error
from blogfusion_server.core.security import PasswordHasher, TokenCodec
from blogfusion_server.database import build_storage, get_storage
from blogfusion_server.storage import Storage


logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
    assistant: WritingAssistant | None = None,
) -> FastAPI:
    """
    Builds the application with its own storage, token codec, hasher and
    writing assistant. Storage is created on startup and closed on shutdown
    unless it was passed in, in which case the caller owns it.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = storage is None
        app.state.storage = storage or build_storage(settings)
        logger.info("Storage ready (backend=%s)", settings.storage_backend if owned else "injected")
        try:
            yield
        finally:
            if owned:
                app.state.storage.close()
                logger.info("Storage closed")

    app = FastAPI(title="BlogFusion", lifespan=lifespan)

    app.state.settings = settings
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_codec = TokenCodec(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
    app.state.assistant = assistant or WritingAssistant(
        model=settings.openai_model,
        max_tokens=settings.ai_max_tokens,
        timeout=settings.ai_timeout_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BlogFusionError, handle_blogfusion_error)

    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(assist.router)

    @app.get("/health")
    def health(storage: Storage = Depends(get_storage)):
        return {"status": "ok", "users": len(storage.users)}

    return app


app = create_app()
