# blogfusion_server/database.py

from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi import Request
from blogfusion_server.config import Settings
from blogfusion_server.storage import (
    MemoryPostRepository,
    MemoryUserRepository,
    SqlPostRepository,
    SqlUserRepository,
    Storage,
)
from blogfusion_server.storage.tables import Base


def create_db_engine(url: str) -> Engine:
    """
    Creates the engine for the sql storage backend.
    SQLite files get their parent directory created; in-memory SQLite
    shares one connection across threads so every session sees the same data.
    """
    parsed = make_url(url)
    kwargs = {}

    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autoflush=False,
        expire_on_commit=False,
        bind=engine
    )


def init_db(engine: Engine):
    Base.metadata.create_all(bind=engine)


# -------------------------------
# Storage Lifecycle
# -------------------------------

def build_storage(settings: Settings) -> Storage:
    """
    Constructs the repositories for the configured backend.
    The caller owns the result and must close() it on shutdown.
    """
    if settings.storage_backend == "memory":
        users = MemoryUserRepository()
        return Storage(users=users, posts=MemoryPostRepository(users))

    if settings.storage_backend == "sql":
        engine = create_db_engine(settings.database_url)
        init_db(engine)
        session_factory = make_session_factory(engine)
        users = SqlUserRepository(session_factory)
        return Storage(
            users=users,
            posts=SqlPostRepository(users, session_factory),
            on_close=[engine.dispose],
        )

    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
