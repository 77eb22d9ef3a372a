import logging
import sys
from typing import Optional, TextIO, Union

ROOT_LOGGER = "Tree_Digest"

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def get_logger(source: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{source}")


def log(level: Union[str, int], source: str, message: str) -> None:
    """
    Log message under the Tree_Digest.<source> logger.
    """
    get_logger(source).log(_to_level(level), message)


def configure_logging(
    level: Union[str, int] = "WARNING",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Calling it again replaces the handler instead of stacking another one.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(_to_level(level))

    for handler in list(logger.handlers):
        if getattr(handler, "_tree_digest", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    handler._tree_digest = True
    logger.addHandler(handler)

    return logger
