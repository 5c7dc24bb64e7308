# PURPOSE: task repository over SQLAlchemy. Every call is scoped by user_id.

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .db_models import TaskDB, now_utc

logger = logging.getLogger(__name__)

# Fields a full edit (PUT) overwrites
EDITABLE_FIELDS = ("title", "description", "category", "priority", "status", "due_date")
# Fields that may be explicitly cleared with null in a partial update
NULLABLE_FIELDS = ("description", "due_date")


# --- Session dependency ----------------------------------------------------


def get_db():
    """Yield a SQLAlchemy session (used as a FastAPI dependency)."""
    from .db import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# --- CRUD: Tasks -----------------------------------------------------------


def list_tasks(
    db: Session, *, user_id: str, limit: Optional[int] = None, newest_first: bool = True
) -> List[TaskDB]:
    """Return the user's tasks, newest first by default, optionally capped.

    Pass newest_first=False for insertion order (first-seen grouping).
    """
    query = db.query(TaskDB).filter(TaskDB.user_id == user_id)
    if newest_first:
        query = query.order_by(TaskDB.created_at.desc(), TaskDB.id.desc())
    else:
        query = query.order_by(TaskDB.created_at.asc(), TaskDB.id.asc())
    if limit:
        query = query.limit(limit)
    return query.all()


def create_task(db: Session, data, *, user_id: str) -> TaskDB:
    """Insert a task from a TaskCreate-like object; id and timestamps are assigned here."""
    now = now_utc()
    row = TaskDB(
        title=data.title,
        description=getattr(data, "description", None),
        category=data.category,
        priority=getattr(data, "priority", None) or "medium",
        status=getattr(data, "status", None) or "pending",
        due_date=getattr(data, "due_date", None),
        user_id=user_id,
        created_at=now,
        updated_at=now,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("task created id=%s user_id=%s", row.id, user_id)
    return row


def get_task(db: Session, task_id: str, *, user_id: str) -> Optional[TaskDB]:
    """Fetch a single task owned by user_id."""
    return (
        db.query(TaskDB)
        .filter(TaskDB.id == task_id, TaskDB.user_id == user_id)
        .one_or_none()
    )


def replace_task(db: Session, task_id: str, data, *, user_id: str) -> Optional[TaskDB]:
    """Full edit (PUT). Returns updated row or None if not found."""
    row = get_task(db, task_id, user_id=user_id)
    if not row:
        return None
    for field in EDITABLE_FIELDS:
        setattr(row, field, getattr(data, field, None))
    row.updated_at = now_utc()
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_task(db: Session, task_id: str, data, *, user_id: str) -> Optional[TaskDB]:
    """Partial update (PATCH); merges only the fields the caller set."""
    row = get_task(db, task_id, user_id=user_id)
    if not row:
        return None
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if field not in EDITABLE_FIELDS:
            continue
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(row, field, value)
    row.updated_at = now_utc()
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def delete_task(db: Session, task_id: str, *, user_id: str) -> bool:
    """Delete a task; returns True if deleted, False if not found/not owned."""
    row = get_task(db, task_id, user_id=user_id)
    if not row:
        return False
    db.delete(row)
    db.commit()
    logger.info("task deleted id=%s user_id=%s", task_id, user_id)
    return True
