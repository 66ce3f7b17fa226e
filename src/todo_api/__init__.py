"""
In-memory Todo API built on FastAPI.

Exposes ``create_app`` for building an application around a fresh store;
``todo_api.main:app`` is the module-level instance served by uvicorn.
"""

from .main import create_app  # noqa: F401
