# Auto-generated __init__.py

from . import algorithms
from .algorithms import DEFAULT_ALGORITHM
from .algorithms import DigestAlgorithm
from .algorithms import MD5
from .algorithms import SHA256
from .algorithms import SHA512
from .algorithms import available_algorithms
from .algorithms import get_algorithm
from . import encoding
from .encoding import is_hex_digest
from .encoding import to_hex_string
from . import engine
from .engine import digest_file
from .engine import hash_file
from . import errors
from .errors import RootNotFound
from .errors import TreeDigestError
from .errors import UnreadableFile
from .errors import UnsupportedAlgorithm
from . import fs
from .fs import create_path
from .fs import delete_tree
from .fs import ensure_directory
from .fs import ensure_parent
from .fs import write_bytes
from . import models
from .models import DEFAULT_BUFFER_SIZE
from .models import HashSettings
from .models import ResultEntry
from . import walker
from .walker import TreeHasher
from .walker import combine_child_digests
from .walker import hash_tree
from .walker import hash_tree_async
from .walker import walk_tree

__all__ = [
    "algorithms",
    "encoding",
    "engine",
    "errors",
    "fs",
    "models",
    "walker",
    "DEFAULT_ALGORITHM",
    "DEFAULT_BUFFER_SIZE",
    "DigestAlgorithm",
    "HashSettings",
    "MD5",
    "ResultEntry",
    "RootNotFound",
    "SHA256",
    "SHA512",
    "TreeDigestError",
    "TreeHasher",
    "UnreadableFile",
    "UnsupportedAlgorithm",
    "available_algorithms",
    "combine_child_digests",
    "create_path",
    "delete_tree",
    "digest_file",
    "ensure_directory",
    "ensure_parent",
    "get_algorithm",
    "hash_file",
    "hash_tree",
    "hash_tree_async",
    "is_hex_digest",
    "to_hex_string",
    "walk_tree",
    "write_bytes",
]
