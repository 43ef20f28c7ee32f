# blogfusion_server/storage/__init__.py

from .base import PostRepository, UserRepository, Storage, utcnow
from .memory import MemoryPostRepository, MemoryUserRepository
from .sql import SqlPostRepository, SqlUserRepository
