from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from .models import PRIORITY_RANK, Priority, TodoEntity


class SortField(str, Enum):
    TITLE = "title"
    PRIORITY = "priority"
    DUE_DATE = "dueDate"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _by_title(t: TodoEntity) -> str:
    return t["title"].lower()


def _by_priority(t: TodoEntity) -> int:
    return PRIORITY_RANK[t["priority"]]


def _by_due_date(t: TodoEntity) -> float:
    # Todos without a due date sort as the epoch
    return t["due_date"].timestamp() if t["due_date"] is not None else 0.0


def _by_created_at(t: TodoEntity) -> float:
    return t["created_at"].timestamp()


SORT_KEYS: Dict[SortField, Callable[[TodoEntity], Any]] = {
    SortField.TITLE: _by_title,
    SortField.PRIORITY: _by_priority,
    SortField.DUE_DATE: _by_due_date,
    SortField.CREATED_AT: _by_created_at,
}


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class TodoQuery:
    """
    Resolved filter and sort parameters for listing todos.
    """
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    search: Optional[str] = None
    sort_by: SortField = SortField.CREATED_AT
    order: SortOrder = SortOrder.DESC

    @classmethod
    def from_params(
        cls,
        completed: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> "TodoQuery":
        """
        Resolve raw query-string values.
        - completed: "true" (any case) is True, any other supplied value is False
        - priority: unknown values are ignored
        - search: empty text is ignored
        - sort_by: unknown fields fall back to createdAt
        - order: "asc" (any case) is ascending, anything else descending
        """
        resolved_completed = None
        if completed is not None:
            resolved_completed = completed.strip().lower() == "true"

        resolved_priority = None
        if priority in {p.value for p in Priority}:
            resolved_priority = Priority(priority)

        try:
            resolved_sort = SortField(sort_by) if sort_by else SortField.CREATED_AT
        except ValueError:
            resolved_sort = SortField.CREATED_AT

        resolved_order = SortOrder.ASC if (order or "").strip().lower() == "asc" else SortOrder.DESC

        return cls(
            completed=resolved_completed,
            priority=resolved_priority,
            search=search or None,
            sort_by=resolved_sort,
            order=resolved_order,
        )

    def matches(self, todo: TodoEntity) -> bool:
        if self.completed is not None and todo["completed"] != self.completed:
            return False
        if self.priority is not None and todo["priority"] != self.priority:
            return False
        if self.search:
            s = self.search.lower()
            title_ok = s in todo["title"].lower()
            desc_ok = s in todo["description"].lower() if todo["description"] else False
            if not (title_ok or desc_ok):
                return False
        return True

    def filters(self) -> Dict[str, Any]:
        """Echo of the resolved parameters, keyed as in the query string."""
        return {
            "completed": self.completed,
            "priority": self.priority,
            "search": self.search,
            "sortBy": self.sort_by.value,
            "order": self.order.value,
        }


@dataclass(frozen=True)
class QueryResult:
    todos: List[TodoEntity]
    total: int
    filters: Dict[str, Any]


# PUBLIC_INTERFACE
def run_query(todos: Sequence[TodoEntity], query: Optional[TodoQuery] = None) -> QueryResult:
    """
    Filter and sort ``todos`` without touching the input sequence.

    Filters apply in order completed, priority, search. Sorting is stable, so
    todos with equal keys keep their insertion order in either direction.
    """
    q = query or TodoQuery()
    items = [t for t in todos if q.matches(t)]
    items.sort(key=SORT_KEYS[q.sort_by], reverse=q.order is SortOrder.DESC)
    return QueryResult(todos=items, total=len(items), filters=q.filters())
