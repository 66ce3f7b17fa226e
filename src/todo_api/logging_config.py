from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``todo_api`` logger hierarchy with a stream handler.

    Safe to call more than once; the handler is only attached the first time.
    """
    logger = logging.getLogger("todo_api")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
