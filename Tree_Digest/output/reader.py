from pathlib import Path
from typing import Dict, Tuple

from Tree_Digest.core.encoding import is_hex_digest
from Tree_Digest.output.writer import SEPARATOR


def parse_line(line: str) -> Tuple[Path, str]:
    """
    Split a "<path>: <digest>" line.

    The digest never contains the separator, so the last occurrence
    is used and paths containing ": " survive.
    """
    line = line.rstrip("\r\n")
    path, sep, digest = line.rpartition(SEPARATOR)
    if not sep or not path or not is_hex_digest(digest):
        raise ValueError(f"Malformed hash line: {line!r}")
    return Path(path), digest


def read_hashes(path: Path) -> Dict[Path, str]:
    hashes: Dict[Path, str] = {}

    # surrogateescape keeps names that are not valid UTF-8 byte-exact
    with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
        for lineno, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                key, digest = parse_line(line)
            except ValueError as exc:
                raise ValueError(f"{path}:{lineno}: {exc}") from exc
            hashes[key] = digest

    return hashes
