from pathlib import Path
from typing import Union

from Tree_Digest.core.algorithms import DigestAlgorithm, get_algorithm
from Tree_Digest.core.encoding import to_hex_string
from Tree_Digest.core.errors import UnreadableFile
from Tree_Digest.core.models import DEFAULT_BUFFER_SIZE


def digest_file(path: Path, hasher, buffer_size: int = DEFAULT_BUFFER_SIZE) -> bytes:
    """
    Stream a file through hasher and return the raw digest.

    At most buffer_size bytes are held at a time. The hasher is
    mutated, so callers must hand in a fresh one per file.

    Raises UnreadableFile if the file cannot be opened or a read fails.
    """
    if buffer_size <= 0:
        raise ValueError(f"buffer_size must be positive, got {buffer_size}")

    buffer = bytearray(buffer_size)
    view = memoryview(buffer)

    try:
        with open(path, "rb", buffering=0) as f:
            while True:
                n = f.readinto(view)
                if not n:
                    break
                hasher.update(view[:n])
    except OSError as exc:
        raise UnreadableFile(path, exc.strerror or str(exc)) from exc

    return hasher.digest()


def hash_file(
    path: Path,
    algorithm: Union[str, DigestAlgorithm] = "sha512",
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> str:
    algorithm = get_algorithm(algorithm)
    return to_hex_string(digest_file(path, algorithm.new(), buffer_size))
