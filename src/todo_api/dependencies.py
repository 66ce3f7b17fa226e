from __future__ import annotations

from fastapi import Request

from .store import InMemoryTodoStore


# PUBLIC_INTERFACE
def get_store(request: Request) -> InMemoryTodoStore:
    """
    Return the store owned by the running application.

    The store is created once by ``create_app`` and kept on ``app.state``.
    """
    return request.app.state.store
