import asyncio
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import (
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from Tree_Digest.core.algorithms import DEFAULT_ALGORITHM, DigestAlgorithm, get_algorithm
from Tree_Digest.core.encoding import to_hex_string
from Tree_Digest.core.engine import digest_file
from Tree_Digest.core.errors import RootNotFound, UnreadableFile
from Tree_Digest.core.models import DEFAULT_BUFFER_SIZE, HashSettings, ResultEntry
from Tree_Digest.utils.logger import log

OnFile = Callable[[Path], str]
OnDirectoryClose = Callable[[Path, List[Tuple[str, str]]], Optional[str]]


# ============================================================
# Ordering + directory rule
# ============================================================

def name_key(name: str) -> bytes:
    """
    Byte-wise sort key for a child name.

    Independent of locale and of the order the filesystem lists entries.
    """
    return os.fsencode(name)


def order_children(
    children: Union[Mapping[str, str], Iterable[Tuple[str, str]]],
) -> List[Tuple[str, str]]:
    items = children.items() if isinstance(children, Mapping) else children
    return sorted(items, key=lambda item: name_key(item[0]))


def combine_child_digests(
    children: Union[Mapping[str, str], Iterable[Tuple[str, str]]],
    algorithm: Union[str, DigestAlgorithm] = DEFAULT_ALGORITHM,
) -> Optional[str]:
    """
    Digest of a directory from its children's (name, hex digest) pairs.

    The hex strings are concatenated in ascending name order and the
    ASCII bytes of that concatenation are hashed with a fresh instance.
    Returns None when there are no children.
    """
    ordered = order_children(children)
    if not ordered:
        return None

    hasher = get_algorithm(algorithm).new()
    hasher.update("".join(digest for _, digest in ordered).encode("ascii"))
    return to_hex_string(hasher.digest())


# ============================================================
# Traversal
# ============================================================

@dataclass
class _DirectoryScope:
    path: Path
    pending: Iterator[os.DirEntry]
    children: Dict[str, str] = field(default_factory=dict)


def _open_directory(path: Path) -> _DirectoryScope:
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: name_key(e.name))
    except OSError as exc:
        raise UnreadableFile(path, exc.strerror or str(exc)) from exc

    return _DirectoryScope(path=path, pending=iter(entries))


def _classify(entry: os.DirEntry) -> str:
    try:
        if entry.is_symlink():
            return "symlink"
        if entry.is_dir(follow_symlinks=False):
            return "dir"
        if entry.is_file(follow_symlinks=False):
            return "file"
    except OSError as exc:
        raise UnreadableFile(Path(entry.path), exc.strerror or str(exc)) from exc
    return "special"


def walk_tree(
    root: Path,
    on_file: OnFile,
    on_directory_close: OnDirectoryClose,
) -> Iterator[ResultEntry]:
    """
    Depth-first walk of root yielding one ResultEntry per hashed node.

    on_file(path) returns a file's hex digest. on_directory_close(path,
    children) receives the (name, digest) pairs of the directory's
    contributing children in ascending name order and returns the
    directory's digest, or None to emit nothing.

    Directories are emitted after all of their descendants. Siblings are
    visited in ascending byte-wise name order. A directory whose subtree
    holds no files is never passed to on_directory_close.

    Symlinks and special files below root are skipped. Traversal keeps an
    explicit stack of open directories, so depth is not limited by the
    interpreter's recursion limit.
    """
    root = Path(root)

    try:
        mode = os.stat(root).st_mode
    except OSError as exc:
        raise UnreadableFile(root, exc.strerror or str(exc)) from exc

    if stat.S_ISREG(mode):
        yield ResultEntry(root, on_file(root))
        return

    if not stat.S_ISDIR(mode):
        raise UnreadableFile(root, "not a regular file or directory")

    stack: List[_DirectoryScope] = [_open_directory(root)]

    while stack:
        scope = stack[-1]
        entry = next(scope.pending, None)

        # --- directory close ---
        if entry is None:
            stack.pop()

            if not scope.children:
                continue

            digest = on_directory_close(scope.path, order_children(scope.children))
            # record is finalized; drop it before yielding
            scope.children.clear()

            if digest is None:
                continue

            if stack:
                stack[-1].children[scope.path.name] = digest

            yield ResultEntry(scope.path, digest, is_directory=True)
            continue

        path = scope.path / entry.name
        kind = _classify(entry)

        if kind == "dir":
            stack.append(_open_directory(path))
        elif kind == "file":
            digest = on_file(path)
            scope.children[entry.name] = digest
            yield ResultEntry(path, digest)
        else:
            log("DEBUG", "walker", f"Skipping {kind}: {path}")


# ============================================================
# Public API
# ============================================================

class TreeHasher:
    """
    Computes file and directory digests for the tree rooted at root.

    The root must exist when the hasher is built; the algorithm and
    buffer size are fixed from then on. Each call to iter_hashes() is an
    independent run.
    """

    def __init__(
        self,
        root: Path,
        *,
        algorithm: Union[str, DigestAlgorithm] = DEFAULT_ALGORITHM,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ):
        if root is None:
            raise ValueError("root path must not be None")

        root = Path(root)
        if not root.exists():
            raise RootNotFound(root)

        self.root = root
        self.settings = HashSettings(algorithm=algorithm, buffer_size=buffer_size)

    @classmethod
    def from_settings(cls, root: Path, settings: HashSettings) -> "TreeHasher":
        return cls(
            root,
            algorithm=settings.algorithm,
            buffer_size=settings.buffer_size,
        )

    @property
    def algorithm(self) -> DigestAlgorithm:
        return self.settings.algorithm

    @property
    def buffer_size(self) -> int:
        return self.settings.buffer_size

    # -------- Callbacks --------

    def _on_file(self, path: Path) -> str:
        raw = digest_file(path, self.algorithm.new(), self.buffer_size)
        return to_hex_string(raw)

    def _on_directory_close(self, path: Path, children: List[Tuple[str, str]]) -> Optional[str]:
        return combine_child_digests(children, self.algorithm)

    # -------- Runs --------

    def iter_hashes(self) -> Iterator[ResultEntry]:
        log(
            "INFO",
            "walker",
            f"Hashing {self.root} with {self.algorithm.name} "
            f"(buffer {self.buffer_size} bytes)",
        )

        count = 0
        for entry in walk_tree(self.root, self._on_file, self._on_directory_close):
            count += 1
            yield entry

        log("INFO", "walker", f"Hashed {count} entries under {self.root}")

    def to_list(self) -> List[ResultEntry]:
        return list(self.iter_hashes())

    def to_map(self) -> Dict[Path, str]:
        """
        Path -> hex digest, in emission order.
        """
        return {entry.path: entry.digest for entry in self.iter_hashes()}

    def to_file(self, output: Path, *, relative_to: Optional[Path] = None) -> int:
        """
        Write "<path>: <digest>" lines to output. Returns the line count.

        Nothing is left at output if the traversal fails.
        """
        from Tree_Digest.output.writer import write_hashes

        return write_hashes(self.iter_hashes(), output, relative_to=relative_to)


def hash_tree(
    root: Path,
    algorithm: Union[str, DigestAlgorithm] = DEFAULT_ALGORITHM,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> List[ResultEntry]:
    return TreeHasher(root, algorithm=algorithm, buffer_size=buffer_size).to_list()


_DONE = object()


async def hash_tree_async(
    root: Path,
    algorithm: Union[str, DigestAlgorithm] = DEFAULT_ALGORITHM,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    *,
    timeout: Optional[float] = None,
) -> List[ResultEntry]:
    """
    Run hash_tree off the event loop, one node per worker-thread step.

    The traversal itself stays sequential. Between nodes the loop gets
    control back, so wait_for() can abort the whole run on timeout; the
    partial list is discarded and the TimeoutError propagates.
    """
    hasher = TreeHasher(root, algorithm=algorithm, buffer_size=buffer_size)

    async def _collect() -> List[ResultEntry]:
        entries = []
        it = hasher.iter_hashes()
        while True:
            entry = await asyncio.to_thread(next, it, _DONE)
            if entry is _DONE:
                return entries
            entries.append(entry)

    if timeout is None:
        return await _collect()

    try:
        return await asyncio.wait_for(_collect(), timeout)
    except asyncio.TimeoutError:
        log("ERROR", "walker", f"Timed out after {timeout}s hashing {root}")
        raise
