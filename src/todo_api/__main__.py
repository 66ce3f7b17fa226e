"""
Run the Todo API with uvicorn.

Usage:
    python -m todo_api
    todo-api

Listens on HOST:PORT (defaults 0.0.0.0:3000).
"""
from __future__ import annotations

import logging

import uvicorn

from .logging_config import setup_logging
from .settings import get_settings

logger = logging.getLogger("todo_api")


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Todo API server running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
