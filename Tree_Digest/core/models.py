from dataclasses import dataclass
from pathlib import Path
from typing import Union

from Tree_Digest.core.algorithms import (
    DEFAULT_ALGORITHM,
    DigestAlgorithm,
    get_algorithm,
)

DEFAULT_BUFFER_SIZE = 8192


@dataclass(frozen=True)
class ResultEntry:
    """
    One visited node and its lowercase hex digest.

    Files always produce an entry. Directories only produce one when
    they (recursively) contain at least one file.
    """
    path: Path
    digest: str
    is_directory: bool = False

    def line(self) -> str:
        return f"{self.path}: {self.digest}"


@dataclass
class HashSettings:
    """
    Fixed configuration consumed by the walker at construction time.
    """
    algorithm: Union[str, DigestAlgorithm] = DEFAULT_ALGORITHM
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self):
        self.algorithm = get_algorithm(self.algorithm)

        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, int):
            raise ValueError(f"buffer_size must be an int, got {self.buffer_size!r}")
        if self.buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {self.buffer_size}")
