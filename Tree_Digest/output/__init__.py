# Auto-generated __init__.py

from . import reader
from .reader import parse_line
from .reader import read_hashes
from . import writer
from .writer import format_line
from .writer import write_hashes

__all__ = [
    "reader",
    "writer",
    "format_line",
    "parse_line",
    "read_hashes",
    "write_hashes",
]
