# PURPOSE: define how User and Task rows look in the database.

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


def now_utc():
    """Return timezone-aware UTC datetime (stored in DB)."""
    return datetime.now(UTC)


def new_id() -> str:
    return uuid.uuid4().hex


class TaskDB(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=False)
    priority = Column(String(16), nullable=False, default="medium")  # low | medium | high
    status = Column(String(16), nullable=False, default="pending")  # pending | in-progress | completed
    due_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=now_utc)
    updated_at = Column(DateTime, default=now_utc)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)


class UserDB(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc)
    tasks = relationship("TaskDB", backref="owner", cascade="all, delete-orphan")


# Every query is scoped by owner, usually newest first
Index("ix_tasks_user_created", TaskDB.user_id, TaskDB.created_at)
Index("ix_tasks_status", TaskDB.status)
Index("ix_tasks_category", TaskDB.category)
