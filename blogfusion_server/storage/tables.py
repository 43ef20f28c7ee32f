# blogfusion_server/storage/tables.py

from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


# -------------------------------
# Table Models (sql backend)
# -------------------------------

class UserRow(Base):
    """
    Database model for registered users.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    hashed_password = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    avatar = Column(String, nullable=True)


class PostRow(Base):
    """
    Database model for blog posts.
    author_id has no foreign key: a post may outlive the user it points at,
    and joins simply drop it.
    """
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True)
    author_id = Column(String(36), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    cover_image = Column(String, nullable=True)
    category = Column(String(100), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
