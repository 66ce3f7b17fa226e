from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import List, Optional

from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


# PUBLIC_INTERFACE
class InMemoryTodoStore:
    """
    Ordered in-memory collection of todos plus a sequential id counter.

    Records keep insertion order. Ids are issued as "1", "2", ... and are
    never reused, even after deletion. ``find_by_id``, ``update`` and
    ``delete`` return None when the id is unknown.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: List[TodoEntity] = []
        self._next_id = 1

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _allocate_id(self) -> str:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return str(i)

    def _index_of(self, todo_id: str) -> int:
        for i, item in enumerate(self._items):
            if item["id"] == todo_id:
                return i
        return -1

    def insert(self, data: TodoCreate) -> TodoEntity:
        """Append a new todo built from a validated create payload."""
        now = self._now()
        entity: TodoEntity = {
            "id": self._allocate_id(),
            "title": data.title.strip(),
            "description": _strip(data.description),
            "completed": False,
            "priority": data.priority,
            "due_date": data.due_date,
            "created_at": now,
            "updated_at": now,
        }
        with self._lock:
            self._items.append(entity)
        logger.debug("Created todo %s", entity["id"])
        return entity

    def find_by_id(self, todo_id: str) -> Optional[TodoEntity]:
        with self._lock:
            i = self._index_of(todo_id)
            return self._items[i] if i >= 0 else None

    def update(self, todo_id: str, data: TodoUpdate) -> Optional[TodoEntity]:
        """Apply the fields present in ``data`` and refresh ``updated_at``."""
        with self._lock:
            i = self._index_of(todo_id)
            if i < 0:
                return None
            item = self._items[i]

            # Update only provided fields
            fields = data.model_fields_set
            if "title" in fields and data.title is not None:
                item["title"] = data.title.strip()
            if "description" in fields:
                item["description"] = _strip(data.description)
            if "completed" in fields and data.completed is not None:
                item["completed"] = data.completed
            if "priority" in fields and data.priority is not None:
                item["priority"] = data.priority
            if "due_date" in fields:
                item["due_date"] = data.due_date

            # updated_at must move forward even when the clock has not ticked
            item["updated_at"] = max(self._now(), item["updated_at"] + timedelta(microseconds=1))
            logger.debug("Updated todo %s fields=%s", todo_id, sorted(fields))
            return item

    def delete(self, todo_id: str) -> Optional[TodoEntity]:
        with self._lock:
            i = self._index_of(todo_id)
            if i < 0:
                return None
            removed = self._items.pop(i)
        logger.debug("Deleted todo %s", todo_id)
        return removed

    def all(self) -> List[TodoEntity]:
        """Return copies of all todos in insertion order."""
        with self._lock:
            return [t.copy() for t in self._items]

    def clear(self) -> None:
        """Remove every todo. The id counter keeps counting."""
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
