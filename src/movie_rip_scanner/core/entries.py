"""File entry abstraction used by the scanner to walk a directory tree."""

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class FileEntry(Protocol):
    """Capabilities the scanner needs from a file or directory."""

    @property
    def name(self) -> str:
        """Final path component."""
        ...

    @property
    def path(self) -> Path:
        """Absolute path of the entry."""
        ...

    @property
    def is_dir(self) -> bool:
        """True for directories."""
        ...

    @property
    def is_file(self) -> bool:
        """True for regular files."""
        ...

    @property
    def is_symlink(self) -> bool:
        """True for symbolic links."""
        ...

    @property
    def size(self) -> int:
        """Size in bytes."""
        ...

    @property
    def parent(self) -> "FileEntry | None":
        """Containing directory, or None at the filesystem root."""
        ...

    def is_readable(self) -> bool:
        """True if the entry can be read (listed, for directories)."""
        ...

    def children(self) -> Iterator["FileEntry"]:
        """Entries inside a directory, sorted by name."""
        ...


@dataclass(frozen=True)
class LocalFileEntry:
    """FileEntry backed by the local filesystem."""

    path: Path

    @classmethod
    def from_path(cls, path: Path | str) -> "LocalFileEntry":
        """Create an entry for the absolute form of ``path``."""
        return cls(Path(path).absolute())

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return self.path.is_dir()

    @property
    def is_file(self) -> bool:
        return self.path.is_file()

    @property
    def is_symlink(self) -> bool:
        return self.path.is_symlink()

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    @property
    def parent(self) -> "LocalFileEntry | None":
        parent = self.path.parent
        if parent == self.path:
            return None
        return LocalFileEntry(parent)

    def is_readable(self) -> bool:
        if self.is_dir:
            return os.access(self.path, os.R_OK | os.X_OK)
        return os.access(self.path, os.R_OK)

    def children(self) -> Iterator["LocalFileEntry"]:
        """
        List the entries of this directory in name order.

        Raises:
            OSError: If the directory cannot be listed
        """
        for child in sorted(self.path.iterdir(), key=lambda p: p.name):
            yield LocalFileEntry(child)

    def __str__(self) -> str:
        return str(self.path)
