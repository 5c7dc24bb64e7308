# PURPOSE: /tasks CRUD plus the filtered task list and category choices.

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ..analytics import active_filters_count, distinct_categories, filter_tasks
from ..api.deps import parse_category, parse_priority, parse_status
from ..auth import get_current_user
from ..models import SUGGESTED_CATEGORIES, Task, TaskCreate, TaskPut, TaskUpdate, UserPublic
from ..store_db import (
    get_db,
    list_tasks as db_list_tasks,
    create_task as db_create_task,
    get_task as db_get_task,
    replace_task as db_replace_task,
    update_task as db_update_task,
    delete_task as db_delete_task,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/", response_model=List[Task])
def list_tasks(
    response: Response,
    q: str = "",
    status_filter: str = Depends(parse_status),
    category: str = Depends(parse_category),
    priority: str = Depends(parse_priority),
    db: Session = Depends(get_db),
    user: UserPublic = Depends(get_current_user),
):
    items = db_list_tasks(db, user_id=user.id)
    matched = filter_tasks(items, q, status_filter, category, priority)
    response.headers["X-Total-Count"] = str(len(matched))
    response.headers["X-Active-Filters"] = str(
        active_filters_count(status_filter, category, priority)
    )
    return matched


@router.post("/", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    item: TaskCreate,
    response: Response,
    db: Session = Depends(get_db),
    user: UserPublic = Depends(get_current_user),
):
    task = db_create_task(db, item, user_id=user.id)
    response.headers["Location"] = f"/api/v1/tasks/{task.id}"
    return task


@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db), user: UserPublic = Depends(get_current_user)):
    return distinct_categories(db_list_tasks(db, user_id=user.id))


@router.get("/suggested-categories", response_model=List[str])
def suggested_categories(user: UserPublic = Depends(get_current_user)):
    return SUGGESTED_CATEGORIES


@router.get("/{task_id}", response_model=Task)
def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    user: UserPublic = Depends(get_current_user),
):
    task = db_get_task(db, task_id, user_id=user.id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.put("/{task_id}", response_model=Task)
def put_task(
    task_id: str,
    item: TaskPut,
    db: Session = Depends(get_db),
    user: UserPublic = Depends(get_current_user),
):
    updated = db_replace_task(db, task_id, item, user_id=user.id)
    if not updated:
        raise HTTPException(status_code=404, detail="Task not found")
    return updated


@router.patch("/{task_id}", response_model=Task)
def patch_task(
    task_id: str,
    item: TaskUpdate,
    db: Session = Depends(get_db),
    user: UserPublic = Depends(get_current_user),
):
    updated = db_update_task(db, task_id, item, user_id=user.id)
    if not updated:
        raise HTTPException(status_code=404, detail="Task not found")
    return updated


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    user: UserPublic = Depends(get_current_user),
):
    if not db_delete_task(db, task_id, user_id=user.id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
