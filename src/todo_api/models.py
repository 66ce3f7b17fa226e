from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, Optional, TypedDict


# PUBLIC_INTERFACE
class Priority(str, Enum):
    """Priority level of a todo item."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITY_VALUES = tuple(p.value for p in Priority)

# Numeric rank used when ordering by priority
PRIORITY_RANK: Dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo item held by the
    in-memory store.

    Fields:
    - id: Unique string identifier assigned by the store ("1", "2", ...)
    - title: Short title, trimmed, never blank
    - description: Optional detailed description
    - completed: Boolean completion flag
    - priority: One of low/medium/high
    - due_date: Optional due datetime (UTC)
    - created_at: UTC creation timestamp
    - updated_at: UTC last update timestamp
    """

    id: str
    title: str
    description: Optional[str]
    completed: bool
    priority: Priority
    due_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
