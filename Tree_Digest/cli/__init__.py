# Auto-generated __init__.py

from . import hash_tree
from .hash_tree import apply_overrides
from .hash_tree import load_settings
from .hash_tree import run

__all__ = [
    "hash_tree",
    "apply_overrides",
    "load_settings",
    "run",
]
