# Task analytics package: pure aggregation and filtering helpers

from .aggregator import (
    as_utc,
    build_analytics,
    build_dashboard,
    category_distribution,
    completion_rate,
    is_overdue,
    priority_distribution,
    recent_tasks,
    status_distribution,
    summary_counts,
    weekly_activity,
)
from .filters import (
    ALL,
    active_filters_count,
    distinct_categories,
    filter_tasks,
    matches_term,
)

__all__ = [
    "ALL",
    "active_filters_count",
    "as_utc",
    "build_analytics",
    "build_dashboard",
    "category_distribution",
    "completion_rate",
    "distinct_categories",
    "filter_tasks",
    "is_overdue",
    "matches_term",
    "priority_distribution",
    "recent_tasks",
    "status_distribution",
    "summary_counts",
    "weekly_activity",
]
