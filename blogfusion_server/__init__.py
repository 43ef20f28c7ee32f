"""BlogFusion backend: FastAPI service for users, posts and AI writing assistance."""

__version__ = "0.1.0"
