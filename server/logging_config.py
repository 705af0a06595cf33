"""Logging setup shared by the status API and the fork pipeline."""

import logging
import os
import sys
import time
from contextlib import contextmanager
from functools import wraps
from typing import Callable, Generator, Optional, TypeVar

SIMPLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Third-party loggers held above the application level
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "sse_starlette": logging.WARNING,
}

T = TypeVar("T")


def resolve_log_level(level: Optional[str] = None) -> tuple[int, bool]:
    """
    Map a level name (argument, then LOG_LEVEL, then INFO) to a logging level.

    Returns:
        The level and whether the name was recognised
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    if isinstance(value, int):
        return value, True
    return logging.INFO, False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging on stderr; stdout belongs to the plugin host."""
    log_level, known = resolve_log_level(level)

    logging.basicConfig(
        level=log_level,
        format=DETAILED_FORMAT if log_level <= logging.DEBUG else SIMPLE_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    if not known:
        logging.getLogger(__name__).warning(
            "Unknown log level %r, using INFO", level or os.environ.get(LOG_LEVEL_ENV)
        )


@contextmanager
def log_timing(
    logger: logging.Logger, operation: str, level: int = logging.DEBUG
) -> Generator[None, None, None]:
    """Log how long the wrapped block took.

    Example:
        with log_timing(logger, "Load persisted tasks"):
            registry.load()
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.log(level, "%s took %.1fms", operation, (time.perf_counter() - start) * 1000)


def timed(
    operation: Optional[str] = None, level: int = logging.DEBUG
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator logging the duration of an async route or helper.

    Example:
        @timed("fetch_task_messages")
        async def get_task_logs(task_id: str):
            ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        logger = logging.getLogger(func.__module__)
        name = operation or func.__name__

        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            with log_timing(logger, name, level):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
