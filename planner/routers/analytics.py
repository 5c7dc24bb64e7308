# PURPOSE: /dashboard and /analytics reports over the current user's tasks.

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..analytics import build_analytics, build_dashboard
from ..auth import get_current_user
from ..config import settings
from ..models import AnalyticsReport, DashboardReport, UserPublic
from ..store_db import get_db, list_tasks as db_list_tasks

router = APIRouter(tags=["analytics"])


@router.get("/dashboard", response_model=DashboardReport)
def dashboard(db: Session = Depends(get_db), user: UserPublic = Depends(get_current_user)):
    """Summary counts, completion rate and the most recent tasks."""
    tasks = db_list_tasks(db, user_id=user.id)
    return build_dashboard(tasks, recent_limit=settings.DASHBOARD_RECENT_LIMIT)


@router.get("/analytics", response_model=AnalyticsReport)
def analytics(db: Session = Depends(get_db), user: UserPublic = Depends(get_current_user)):
    """Distributions and 7-day activity."""
    return build_analytics(db_list_tasks(db, user_id=user.id, newest_first=False))
