"""Console loggers for the provider adapters, formatted like uvicorn's own output."""

import logging
from typing import Optional, Union

from uvicorn.logging import DefaultFormatter

from configs import settings

FORMAT = "%(levelprefix)s %(asctime)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = __name__, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Return ``name``'s logger with a single colourised stream handler.

    The level falls back to ``LOG_LEVEL`` from the environment.
    """
    resolved = level if level is not None else settings.LOG_LEVEL
    if isinstance(resolved, str):
        resolved = resolved.upper()
    logger = logging.getLogger(name)
    logger.setLevel(resolved)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(resolved)
        handler.setFormatter(DefaultFormatter(FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
