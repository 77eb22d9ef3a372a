import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from Tree_Digest.core.fs import ensure_parent
from Tree_Digest.core.models import ResultEntry
from Tree_Digest.utils.logger import log

SEPARATOR = ": "


def format_line(path: Path, digest: str) -> str:
    return f"{path}{SEPARATOR}{digest}\n"


def display_path(path: Path, relative_to: Optional[Path]) -> Path:
    if relative_to is None:
        return path
    try:
        return path.relative_to(relative_to)
    except ValueError:
        return path


def write_hashes(
    entries: Iterable[ResultEntry],
    output: Path,
    *,
    relative_to: Optional[Path] = None,
) -> int:
    """
    Write one "<path>: <digest>" line per entry, in the order given.

    Lines go to a temporary file next to output which is renamed into
    place once entries is exhausted. If iterating entries raises, the
    temporary file is removed and output is left untouched.
    """
    if output is None:
        raise ValueError("output file must not be None")

    output = Path(output)
    ensure_parent(output)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output.name}.",
        suffix=".tmp",
        dir=output.parent,
    )
    count = 0
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
            for entry in entries:
                f.write(format_line(display_path(entry.path, relative_to), entry.digest))
                count += 1
        os.replace(tmp_name, output)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    log("INFO", "writer", f"Wrote {count} hashes to {output}")
    return count
