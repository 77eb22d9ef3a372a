from pathlib import Path
import shutil

from Tree_Digest.utils.logger import log


def ensure_directory(path: Path) -> Path:
    if path is None:
        raise ValueError("path must not be None")
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def ensure_parent(path: Path) -> Path:
    """
    Make sure every parent directory of path exists.
    """
    if path is None:
        raise ValueError("path must not be None")
    return ensure_directory(Path(path).parent)


def create_path(root: Path, name: str) -> Path:
    """
    Resolve name under root and create its parent directories.

    A leading "/" or "\\" on name is dropped so it always lands inside root.
    The returned path itself is not created.
    """
    if root is None or name is None:
        raise ValueError("root and name must not be None")

    if name.startswith(("/", "\\")):
        name = name[1:]

    path = Path(root) / name
    ensure_parent(path)
    return path


def write_bytes(path: Path, data: bytes) -> Path:
    if data is None:
        raise ValueError("data must not be None")
    path = Path(path)
    ensure_parent(path)
    path.write_bytes(data)
    return path


def delete_tree(path: Path) -> None:
    """
    Recursively delete path. Missing paths are ignored.
    """
    if path is None:
        raise ValueError("path must not be None")

    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)
    else:
        return

    log("DEBUG", "fs", f"Deleted {path}")
