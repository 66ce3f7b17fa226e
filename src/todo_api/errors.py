from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import status


# PUBLIC_INTERFACE
class TodoApiError(Exception):
    """
    Base class for errors that map onto a JSON error response.

    Subclasses set ``status_code`` and ``error``; ``details`` carries an
    optional itemized list (validation messages).
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(self, details: Optional[List[str]] = None) -> None:
        super().__init__(self.error)
        self.details = details

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            content["details"] = list(self.details)
        return content


class ValidationFailed(TodoApiError):
    """One or more field rules were violated."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation failed"

    def __init__(self, details: List[str]) -> None:
        super().__init__(details)


class MalformedBody(TodoApiError):
    """The request body is not a JSON object."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid JSON body"


class TodoNotFound(TodoApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Todo not found"

    def __init__(self, todo_id: str) -> None:
        super().__init__()
        self.todo_id = todo_id
