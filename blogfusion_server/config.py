# blogfusion_server/config.py

import os
import logging
import secrets
from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """
    Runtime configuration for the backend.
    Built from environment variables (and .env) by Settings.from_env().
    """
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    bcrypt_rounds: int = 12

    storage_backend: str = "memory"
    database_url: str = "sqlite:///./data/blogfusion.db"

    openai_model: str = "gpt-4o-mini"
    ai_max_tokens: int = 2048
    ai_timeout_seconds: float = 60

    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        secret = os.getenv("JWT_SECRET_KEY")
        if not secret:
            logger.warning("JWT_SECRET_KEY is not set; tokens will not survive a restart")
            secret = secrets.token_urlsafe(32)

        origins = os.getenv("CORS_ORIGINS", "*")

        return cls(
            jwt_secret_key=secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7)),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", 12)),
            storage_backend=os.getenv("STORAGE_BACKEND", "memory"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./data/blogfusion.db"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            ai_max_tokens=int(os.getenv("AI_MAX_TOKENS", 2048)),
            ai_timeout_seconds=float(os.getenv("AI_TIMEOUT_SECONDS", 60)),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
