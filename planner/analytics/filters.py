# PURPOSE: task list filtering (search + status/category/priority).

from __future__ import annotations

from typing import Any, List, Optional, Sequence

# Sentinel for "no constraint" on an equality filter
ALL = "all"


def _is_unset(value: Optional[str]) -> bool:
    return value is None or value == "" or value == ALL


def matches_term(task: Any, term: str) -> bool:
    """Case-insensitive substring match on title, description or category."""
    if not term:
        return True
    needle = term.lower()
    return (
        needle in task.title.lower()
        or needle in (task.description or "").lower()
        or needle in task.category.lower()
    )


def filter_tasks(
    tasks: Sequence[Any],
    term: str = "",
    status: Optional[str] = ALL,
    category: Optional[str] = ALL,
    priority: Optional[str] = ALL,
) -> List[Any]:
    """Return the tasks matching every filter, in input order."""
    return [
        t
        for t in tasks
        if matches_term(t, term or "")
        and (_is_unset(status) or t.status == status)
        and (_is_unset(category) or t.category == category)
        and (_is_unset(priority) or t.priority == priority)
    ]


def distinct_categories(tasks: Sequence[Any]) -> List[str]:
    """Sorted set of categories present in `tasks` (filter choices)."""
    return sorted({t.category for t in tasks})


def active_filters_count(
    status: Optional[str] = ALL,
    category: Optional[str] = ALL,
    priority: Optional[str] = ALL,
) -> int:
    return sum(1 for value in (status, category, priority) if not _is_unset(value))
