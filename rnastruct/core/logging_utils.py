from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
LEVEL_ENV = "RNASTRUCT_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; the first call configures the root handler.

    The default level comes from ``RNASTRUCT_LOG_LEVEL`` (INFO if unset).
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=os.environ.get(LEVEL_ENV, "INFO").upper(), format=LOG_FORMAT)
    return logger


def set_level(level: str | int) -> None:
    """Set the level of every rnastruct logger at once."""
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger("rnastruct").setLevel(level)
