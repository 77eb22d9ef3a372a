from pathlib import Path


class TreeDigestError(Exception):
    """
    Base class for every failure raised while hashing a tree.
    """


class RootNotFound(TreeDigestError):
    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"File [{self.path}] not found")


class UnreadableFile(TreeDigestError):
    """
    A file could not be opened or read, or a directory could not be listed.

    The underlying OSError is chained as __cause__.
    """

    def __init__(self, path: Path, reason: str | None = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Error occurred while processing [{self.path}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedAlgorithm(TreeDigestError, ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Environment doesn't support [{name}] encoding")
