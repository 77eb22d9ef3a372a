# Auto-generated __init__.py

from . import conftest
from .conftest import make_tree
from .conftest import reset_package_logging
from . import test_algorithms
from . import test_async
from . import test_cli
from . import test_encoding
from . import test_engine
from . import test_fs
from . import test_models
from . import test_output
from . import test_walker

__all__ = [
    "conftest",
    "test_algorithms",
    "test_async",
    "test_cli",
    "test_encoding",
    "test_engine",
    "test_fs",
    "test_models",
    "test_output",
    "test_walker",
    "make_tree",
    "reset_package_logging",
]
