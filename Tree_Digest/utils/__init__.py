# Auto-generated __init__.py

from . import logger
from .logger import configure_logging
from .logger import get_logger
from .logger import log

__all__ = [
    "logger",
    "configure_logging",
    "get_logger",
    "log",
]
