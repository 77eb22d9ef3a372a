import logging
from pathlib import Path

import pytest

from Tree_Digest.utils.logger import ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logging():
    """
    Drop handlers installed by configure_logging() so a handler bound to
    one test's captured stderr never outlives that test.
    """
    yield

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_tree():
    """
    Build files under a root from {"relative/path": bytes | str | None}.
    None creates an (empty) directory.
    """

    def _make(root: Path, layout: dict) -> Path:
        for rel, content in layout.items():
            path = root / rel
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                content = content.encode("utf-8")
            path.write_bytes(content)
        return root

    return _make
