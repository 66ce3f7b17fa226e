"""
Field rules for create/update payloads.

``validate_todo`` is a pure check returning human-readable violations.
``parse_create`` / ``parse_update`` run it and turn a clean payload into the
typed pydantic model the store accepts, so nothing unvalidated reaches a
mutation.
"""
from __future__ import annotations

from typing import Any, List, Mapping

from pydantic import ValidationError

from .errors import ValidationFailed
from .models import PRIORITY_VALUES
from .schemas import TodoCreate, TodoUpdate, parse_due_date

TITLE_REQUIRED = "Title is required and must be a non-empty string"
INVALID_PRIORITY = "Priority must be one of: " + ", ".join(PRIORITY_VALUES)
INVALID_DUE_DATE = "Due date must be a valid date string"
INVALID_DESCRIPTION = "Description must be a string"
INVALID_COMPLETED = "Completed must be a boolean"

# JSON keys read from request bodies; anything else is ignored
CREATE_KEYS = ("title", "description", "priority", "dueDate")
UPDATE_KEYS = CREATE_KEYS + ("completed",)


def _is_valid_due_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parse_due_date(value)
    except ValueError:
        return False
    return True


# PUBLIC_INTERFACE
def validate_todo(data: Mapping[str, Any], partial: bool = False) -> List[str]:
    """
    Check a candidate payload against the field rules.

    Args:
        data: Decoded JSON object.
        partial: When True (updates) only the supplied fields are checked and
            the title is optional.

    Returns:
        List of violation messages; empty when the payload is valid.
    """
    errors: List[str] = []

    if not partial or "title" in data:
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            errors.append(TITLE_REQUIRED)

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(INVALID_DESCRIPTION)

    if "priority" in data:
        priority = data["priority"]
        # null keeps the default on create but cannot clear an existing priority
        if (priority is not None or partial) and priority not in PRIORITY_VALUES:
            errors.append(INVALID_PRIORITY)

    due_date = data.get("dueDate")
    if due_date not in (None, "") and not _is_valid_due_date(due_date):
        errors.append(INVALID_DUE_DATE)

    if partial and "completed" in data and not isinstance(data["completed"], bool):
        errors.append(INVALID_COMPLETED)

    return errors


def _messages(exc: ValidationError) -> List[str]:
    out = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        out.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return out


# PUBLIC_INTERFACE
def parse_create(data: Mapping[str, Any]) -> TodoCreate:
    """Validate a create payload and return it as a ``TodoCreate``.

    Raises:
        ValidationFailed: with the itemized violations.
    """
    errors = validate_todo(data)
    if errors:
        raise ValidationFailed(errors)
    # completed is not accepted on create; new todos always start pending
    fields = {k: v for k, v in data.items() if k in CREATE_KEYS}
    try:
        return TodoCreate.model_validate(fields)
    except ValidationError as exc:
        raise ValidationFailed(_messages(exc)) from exc


# PUBLIC_INTERFACE
def parse_update(data: Mapping[str, Any]) -> TodoUpdate:
    """Validate a partial update payload and return it as a ``TodoUpdate``.

    Raises:
        ValidationFailed: with the itemized violations.
    """
    errors = validate_todo(data, partial=True)
    if errors:
        raise ValidationFailed(errors)
    try:
        return TodoUpdate.model_validate({k: v for k, v in data.items() if k in UPDATE_KEYS})
    except ValidationError as exc:
        raise ValidationFailed(_messages(exc)) from exc
