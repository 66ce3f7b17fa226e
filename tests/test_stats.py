from datetime import datetime, timedelta, timezone

from todo_api.models import Priority
from todo_api.stats import compute_stats

NOW = datetime(2030, 6, 1, 12, 0, tzinfo=timezone.utc)


def make(priority=Priority.MEDIUM, completed=False, due=None):
    return {
        "id": "x",
        "title": "t",
        "description": None,
        "completed": completed,
        "priority": priority,
        "due_date": due,
        "created_at": NOW,
        "updated_at": NOW,
    }


def test_empty_collection():
    stats = compute_stats([], now=NOW)
    assert (stats.total, stats.completed, stats.pending, stats.overdue) == (0, 0, 0, 0)
    assert stats.by_priority == {"high": 0, "medium": 0, "low": 0}


def test_counts():
    todos = [
        make(Priority.HIGH, completed=True),
        make(Priority.HIGH),
        make(Priority.LOW),
        make(),
    ]
    stats = compute_stats(todos, now=NOW)
    assert stats.total == 4
    assert stats.completed == 1
    assert stats.pending == 3
    assert stats.by_priority == {"high": 2, "medium": 1, "low": 1}


def test_overdue_rules():
    todos = [
        make(due=NOW - timedelta(seconds=1)),  # overdue
        make(due=NOW),  # due exactly now is not past
        make(due=NOW + timedelta(days=1)),
        make(due=NOW - timedelta(days=3), completed=True),
        make(due=None),
    ]
    assert compute_stats(todos, now=NOW).overdue == 1


def test_defaults_to_current_time():
    past = datetime.now(timezone.utc) - timedelta(days=1)
    assert compute_stats([make(due=past)]).overdue == 1
