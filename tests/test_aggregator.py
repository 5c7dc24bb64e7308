# PURPOSE: summary counts, completion rate, distributions and weekly buckets.

from datetime import date, datetime, timedelta, timezone

from planner.analytics import (
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

from conftest import make_task

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def _example_tasks():
    return [
        make_task("Read Ch.1", category="Math", priority="high", status="pending", task_id="1"),
        make_task("Write essay", category="Language", priority="low", status="completed", task_id="2"),
    ]


def test_example_summary_and_distribution():
    tasks = _example_tasks()
    stats = summary_counts(tasks, NOW)
    assert stats.total == 2
    assert stats.completed == 1
    assert completion_rate(tasks) == 50.0

    dist = category_distribution(tasks)
    assert [(d.name, d.value, d.percentage) for d in dist] == [
        ("Math", 1, "50.0"),
        ("Language", 1, "50.0"),
    ]


def test_status_buckets_add_up_to_total():
    tasks = [
        make_task(status="pending"),
        make_task(status="in-progress"),
        make_task(status="in-progress"),
        make_task(status="completed"),
        make_task(status="completed"),
        make_task(status="completed"),
    ]
    stats = summary_counts(tasks, NOW)
    assert (stats.pending, stats.in_progress, stats.completed) == (1, 2, 3)
    assert stats.pending + stats.in_progress + stats.completed == stats.total == 6


def test_empty_list():
    stats = summary_counts([], NOW)
    assert stats.total == stats.completed == stats.overdue == 0
    assert completion_rate([]) == 0
    assert category_distribution([]) == []
    assert [b.value for b in priority_distribution([])] == [0, 0, 0]
    assert [b.value for b in status_distribution([])] == [0, 0, 0]


def test_overdue_needs_past_due_date_and_open_status():
    past = NOW - timedelta(days=1)
    future = NOW + timedelta(days=1)
    tasks = [
        make_task(status="pending", due_date=past),
        make_task(status="in-progress", due_date=past),
        make_task(status="completed", due_date=past),
        make_task(status="pending", due_date=future),
        make_task(status="pending"),
    ]
    assert summary_counts(tasks, NOW).overdue == 2
    assert is_overdue(tasks[0], NOW)
    assert not is_overdue(tasks[2], NOW)
    assert not is_overdue(tasks[4], NOW)


def test_overdue_accepts_naive_due_date_as_utc():
    naive_past = (NOW - timedelta(hours=1)).replace(tzinfo=None)
    assert is_overdue(make_task(due_date=naive_past), NOW)


def test_category_distribution_keeps_first_seen_order():
    tasks = [
        make_task(category="Science"),
        make_task(category="Art"),
        make_task(category="Science"),
        make_task(category="zzz custom"),
    ]
    dist = category_distribution(tasks)
    assert [d.name for d in dist] == ["Science", "Art", "zzz custom"]
    assert [d.value for d in dist] == [2, 1, 1]
    assert [d.percentage for d in dist] == ["50.0", "25.0", "25.0"]


def test_category_percentages_sum_to_about_100():
    tasks = [make_task(category=c) for c in ("A", "B", "C", "A", "B", "C", "A")]
    total = sum(float(d.percentage) for d in category_distribution(tasks))
    assert abs(total - 100) <= 0.2


def test_priority_distribution_fixed_order():
    tasks = [make_task(priority="low"), make_task(priority="low"), make_task(priority="high")]
    dist = priority_distribution(tasks)
    assert [(b.name, b.value) for b in dist] == [("High", 1), ("Medium", 0), ("Low", 2)]


def test_status_distribution_fixed_order():
    tasks = [make_task(status="pending"), make_task(status="completed")]
    dist = status_distribution(tasks)
    assert [(b.name, b.value) for b in dist] == [("Completed", 1), ("In Progress", 0), ("Pending", 1)]


def test_weekly_activity_window_edges():
    six_days_ago = datetime(2026, 10, 13, 23, 30, tzinfo=timezone.utc)
    seven_days_ago = datetime(2026, 10, 12, 8, 0, tzinfo=timezone.utc)
    tasks = [
        make_task(created_at=six_days_ago, status="completed"),
        make_task(created_at=seven_days_ago),
        make_task(created_at=NOW),
    ]
    week = weekly_activity(tasks, TODAY)
    assert len(week) == 7
    assert week[0].day == date(2026, 10, 13)
    assert week[-1].day == TODAY
    assert (week[0].created, week[0].completed) == (1, 1)
    assert (week[-1].created, week[-1].completed) == (1, 0)
    assert sum(d.created for d in week) == 2
    assert week[-1].label == "Oct 19"


def test_weekly_activity_uses_current_status_for_creation_day():
    created = datetime(2026, 10, 15, 10, 0, tzinfo=timezone.utc)
    week = weekly_activity([make_task(created_at=created, status="completed")], TODAY)
    day = next(d for d in week if d.day == date(2026, 10, 15))
    assert day.completed == 1


def test_recent_tasks_newest_first_and_capped():
    tasks = [
        make_task(f"t{i}", task_id=str(i), created_at=NOW - timedelta(hours=i))
        for i in range(8)
    ]
    recent = recent_tasks(list(reversed(tasks)), limit=5)
    assert [t.title for t in recent] == ["t0", "t1", "t2", "t3", "t4"]


def test_inputs_are_not_mutated():
    tasks = _example_tasks()
    snapshot = [t.model_dump() for t in tasks]
    build_analytics(tasks, now=NOW)
    build_dashboard(tasks, now=NOW)
    assert [t.model_dump() for t in tasks] == snapshot
    assert [t.id for t in tasks] == ["1", "2"]


def test_build_reports():
    tasks = _example_tasks()
    report = build_analytics(tasks, now=NOW)
    assert report.total == 2
    assert report.completed == 1
    assert report.completion_rate == 50.0
    assert len(report.weekly) == 7
    assert report.weekly[-1].created == 2

    dash = build_dashboard(tasks, now=NOW, recent_limit=1)
    assert dash.stats.total == 2
    assert len(dash.recent_tasks) == 1
