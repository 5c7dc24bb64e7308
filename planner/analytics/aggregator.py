# PURPOSE: derived statistics over an in-memory list of tasks.
#
# Every function here is pure: it reads task-like objects (ORM rows or
# pydantic Task models exposing the same attributes) and never mutates them.

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Sequence

from ..models import (
    AnalyticsReport,
    BucketItem,
    DashboardReport,
    DayActivity,
    DistributionItem,
    Task,
    TaskStats,
)

WEEK_DAYS = 7


def _now_utc() -> datetime:
    return datetime.now(UTC)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to aware UTC; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def is_overdue(task: Any, now: Optional[datetime] = None) -> bool:
    """Due date in the past and not completed."""
    due = as_utc(task.due_date)
    if due is None or task.status == "completed":
        return False
    return due < (as_utc(now) or _now_utc())


def summary_counts(tasks: Sequence[Any], now: Optional[datetime] = None) -> TaskStats:
    now = as_utc(now) or _now_utc()
    stats = TaskStats(total=len(tasks))
    for task in tasks:
        if task.status == "completed":
            stats.completed += 1
        elif task.status == "in-progress":
            stats.in_progress += 1
        else:
            stats.pending += 1
        if is_overdue(task, now):
            stats.overdue += 1
    return stats


def completion_rate(tasks: Sequence[Any]) -> float:
    total = len(tasks)
    if total == 0:
        return 0
    completed = sum(1 for t in tasks if t.status == "completed")
    return completed / total * 100


def _percentage(count: int, total: int) -> str:
    if total == 0:
        return "0"
    return f"{count / total * 100:.1f}"


def category_distribution(tasks: Sequence[Any]) -> List[DistributionItem]:
    """Group by category in first-seen order.

    The order lives in `pairs`; `position` is only a lookup index into it.
    """
    pairs: List[list] = []
    position: dict[str, int] = {}
    for task in tasks:
        idx = position.get(task.category)
        if idx is None:
            position[task.category] = len(pairs)
            pairs.append([task.category, 1])
        else:
            pairs[idx][1] += 1

    total = len(tasks)
    return [
        DistributionItem(name=name, value=count, percentage=_percentage(count, total))
        for name, count in pairs
    ]


def _count_by(tasks: Iterable[Any], field: str, value: str) -> int:
    return sum(1 for t in tasks if getattr(t, field) == value)


def priority_distribution(tasks: Sequence[Any]) -> List[BucketItem]:
    return [
        BucketItem(name="High", value=_count_by(tasks, "priority", "high")),
        BucketItem(name="Medium", value=_count_by(tasks, "priority", "medium")),
        BucketItem(name="Low", value=_count_by(tasks, "priority", "low")),
    ]


def status_distribution(tasks: Sequence[Any]) -> List[BucketItem]:
    return [
        BucketItem(name="Completed", value=_count_by(tasks, "status", "completed")),
        BucketItem(name="In Progress", value=_count_by(tasks, "status", "in-progress")),
        BucketItem(name="Pending", value=_count_by(tasks, "status", "pending")),
    ]


def weekly_activity(tasks: Sequence[Any], today: Optional[date] = None) -> List[DayActivity]:
    """Tasks created on each of the last 7 calendar days (UTC), oldest first.

    `completed` counts tasks created that day whose *current* status is
    completed, not their status as of that day.
    """
    today = today or _now_utc().date()
    days = [today - timedelta(days=offset) for offset in range(WEEK_DAYS - 1, -1, -1)]
    created = {d: 0 for d in days}
    completed = {d: 0 for d in days}

    for task in tasks:
        created_at = as_utc(task.created_at)
        if created_at is None:
            continue
        day = created_at.date()
        if day not in created:
            continue
        created[day] += 1
        if task.status == "completed":
            completed[day] += 1

    return [
        DayActivity(day=d, label=d.strftime("%b %d"), created=created[d], completed=completed[d])
        for d in days
    ]


def recent_tasks(tasks: Sequence[Any], limit: int = 5) -> List[Any]:
    """Newest first by created_at, capped at `limit`."""
    oldest = datetime.min.replace(tzinfo=UTC)
    ordered = sorted(tasks, key=lambda t: as_utc(t.created_at) or oldest, reverse=True)
    return ordered[:limit]


# --- Reports ---------------------------------------------------------------


def build_dashboard(
    tasks: Sequence[Any], *, now: Optional[datetime] = None, recent_limit: int = 5
) -> DashboardReport:
    return DashboardReport(
        stats=summary_counts(tasks, now),
        completion_rate=completion_rate(tasks),
        recent_tasks=[Task.model_validate(t) for t in recent_tasks(tasks, recent_limit)],
    )


def build_analytics(tasks: Sequence[Any], *, now: Optional[datetime] = None) -> AnalyticsReport:
    now = as_utc(now) or _now_utc()
    stats = summary_counts(tasks, now)
    return AnalyticsReport(
        total=stats.total,
        completed=stats.completed,
        completion_rate=completion_rate(tasks),
        categories=category_distribution(tasks),
        priorities=priority_distribution(tasks),
        statuses=status_distribution(tasks),
        weekly=weekly_activity(tasks, now.date()),
    )
