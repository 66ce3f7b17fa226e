from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from .models import Priority, TodoEntity


@dataclass(frozen=True)
class TodoStats:
    total: int
    completed: int
    pending: int
    overdue: int
    by_priority: Dict[str, int]


# PUBLIC_INTERFACE
def compute_stats(todos: Iterable[TodoEntity], now: Optional[datetime] = None) -> TodoStats:
    """
    Summarize the collection at call time.

    A todo is overdue when it is not completed and its due date is strictly
    before ``now`` (defaults to the current UTC time). Todos without a due
    date are never overdue.
    """
    now = now or datetime.now(timezone.utc)
    total = completed = overdue = 0
    by_priority = {p.value: 0 for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)}

    for t in todos:
        total += 1
        by_priority[Priority(t["priority"]).value] += 1
        if t["completed"]:
            completed += 1
        elif t["due_date"] is not None and t["due_date"] < now:
            overdue += 1

    return TodoStats(
        total=total,
        completed=completed,
        pending=total - completed,
        overdue=overdue,
        by_priority=by_priority,
    )
