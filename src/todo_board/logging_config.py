from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stream handler on the `todo_board` logger.

    Safe to call more than once; later calls only adjust the level.
    """
    logger = logging.getLogger("todo_board")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_todo_board", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._todo_board = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
