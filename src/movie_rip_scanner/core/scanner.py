"""Directory scanning module for discovering movie rips under genre folders."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .collection import MovieRipCollection
from .entries import FileEntry, LocalFileEntry
from .exceptions import InvalidDirectoryError
from .models import ApplicationConfig, ScanResult
from .parser import FilenameParser

logger = logging.getLogger(__name__)


class ProgressCallback(Protocol):
    """Protocol for progress callback functions."""

    def __call__(self, current: int, total: int | None = None, message: str = "") -> None:
        """Called to report progress during scanning."""
        ...


@dataclass
class _ScanCounters:
    files: int = 0
    directories: int = 0

    @property
    def visited(self) -> int:
        return self.files + self.directories


def resolve_parent_folder(entry: FileEntry, genre: str | None, root: Path) -> str | None:
    """
    Find the folder a rip is attributed to below its genre.

    Walks up from ``entry`` while the ancestors stay strictly inside ``root``. Returns the
    name of the directory directly below a folder named like ``genre`` (case-insensitive)
    if there is one, otherwise the name of the outermost ancestor below ``root``. Files
    directly in ``root`` have no parent folder.
    """
    genre_lower = genre.lower() if genre is not None else None
    nearest: str | None = None
    current = entry

    while True:
        parent = current.parent
        if parent is None or not parent.is_dir or root not in parent.path.parents:
            return nearest

        if genre_lower is not None and parent.name.lower() == genre_lower and current.is_dir:
            return current.name

        nearest = parent.name
        current = parent


class MovieRipScanner:
    """Scans a genre-organized directory tree for movie rips."""

    def __init__(self, config: ApplicationConfig | None = None):
        """
        Initialize the scanner with configuration.

        Args:
            config: Application configuration, defaults to ApplicationConfig()
        """
        self.config = config or ApplicationConfig()
        self.parser = FilenameParser()
        self._genres = frozenset(self.config.genres)
        self._extensions = frozenset(self.config.included_extensions)

        logger.debug(f"All genres {self.config.genres}")
        logger.debug(f"Included extensions {self.config.included_extensions}")

    def is_genre(self, name: str) -> bool:
        """Check if a directory name is a configured genre (exact match)."""
        return name in self._genres

    def is_movie_rip(self, file_name: str) -> bool:
        """Check if a filename has a configured rip extension (case-insensitive)."""
        return self.parser.get_file_extension(file_name).lower() in self._extensions

    def validate_root(self, root: FileEntry) -> None:
        """
        Check that a scan root exists, is a directory and is readable.

        Raises:
            InvalidDirectoryError: If any of these does not hold
        """
        canonical = root.path.resolve()
        if not root.is_dir:
            raise InvalidDirectoryError(canonical, "does not exist or is not a directory.")
        if not root.is_readable():
            raise InvalidDirectoryError(canonical, "is not readable.")

    def scan(
        self,
        directory: Path | str,
        progress_callback: ProgressCallback | None = None,
    ) -> MovieRipCollection:
        """
        Scan a directory tree for movie rips.

        Args:
            directory: Root of the tree; relative paths are resolved against the cwd
            progress_callback: Optional callback for progress updates

        Returns:
            Unique rips in (title, release year, extension) order; rejected duplicates
            are available on the collection's ``duplicates``

        Raises:
            InvalidDirectoryError: If the directory does not exist, is not a directory
                or cannot be read
        """
        rips, _ = self._scan(directory, progress_callback)
        return rips

    def scan_directory(
        self,
        directory: Path | str,
        progress_callback: ProgressCallback | None = None,
    ) -> ScanResult:
        """
        Scan a directory tree and summarize the results.

        Args:
            directory: Root of the tree
            progress_callback: Optional callback for progress updates

        Returns:
            ScanResult with the rips, duplicates, visit counts and timing

        Raises:
            InvalidDirectoryError: If the directory is not a readable directory
        """
        start_time = time.time()
        rips, counters = self._scan(directory, progress_callback)
        scan_duration = time.time() - start_time

        logger.info(
            f"Scan complete: {len(rips)} movie rips and {len(rips.duplicates)} duplicates "
            f"in {counters.files} files in {scan_duration:.2f} seconds"
        )

        return ScanResult(
            scan_path=LocalFileEntry.from_path(directory).path,
            rips=rips.to_list(),
            duplicates=list(rips.duplicates),
            files_visited=counters.files,
            directories_visited=counters.directories,
            scan_duration_seconds=scan_duration,
        )

    def _scan(
        self,
        directory: Path | str,
        progress_callback: ProgressCallback | None,
    ) -> tuple[MovieRipCollection, _ScanCounters]:
        if not Path(directory).is_absolute():
            logger.warning(
                f"Path {directory} is not absolute and is resolved to {Path(directory).absolute()}"
            )

        root = LocalFileEntry.from_path(directory)
        self.validate_root(root)

        logger.info(f"Indexing movies from {root.path}")

        rips = MovieRipCollection(self.config.duplicate_policy)
        counters = _ScanCounters()
        visited = {root.path.resolve()}
        self._walk(root, root.path, None, visited, rips, counters, progress_callback)
        return rips, counters

    def _walk(
        self,
        directory: FileEntry,
        root: Path,
        genre: str | None,
        visited: set[Path],
        rips: MovieRipCollection,
        counters: _ScanCounters,
        progress_callback: ProgressCallback | None,
    ) -> str | None:
        """
        Visit the entries of ``directory`` depth-first, each before its own contents.

        Returns the current genre after the subtree, so a genre folder stays in effect
        for the siblings visited after it until another genre folder replaces it.
        Symlinked directories are followed; ``visited`` holds the resolved paths of
        directories already walked so that each is walked only once.
        """
        try:
            children = list(directory.children())
        except OSError as e:
            logger.warning(f"Cannot list directory {directory.path}: {e}")
            return genre

        for entry in children:
            logger.debug(f"Found entry {entry.path}")

            if entry.is_dir:
                counters.directories += 1
                if self.is_genre(entry.name):
                    logger.debug(f"Setting current genre to {entry.name}")
                    genre = entry.name
            elif entry.is_file:
                counters.files += 1
                if self.is_movie_rip(entry.name):
                    self._add_rip(entry, root, genre, rips)

            if progress_callback:
                progress_callback(
                    counters.visited, None, f"Scanned {counters.visited} entries..."
                )

            if entry.is_dir:
                resolved = entry.path.resolve()
                if resolved in visited:
                    logger.debug(f"Skipping {entry.path}, {resolved} was already scanned")
                    continue
                if entry.is_symlink:
                    logger.debug(f"Following symlinked directory {entry.path} to {resolved}")
                visited.add(resolved)
                genre = self._walk(
                    entry, root, genre, visited, rips, counters, progress_callback
                )

        return genre

    def _add_rip(
        self, entry: FileEntry, root: Path, genre: str | None, rips: MovieRipCollection
    ) -> None:
        rip = self.parser.parse(entry.name)

        if genre is not None:
            rip.genres.add(genre)

        try:
            rip.file_size_bytes = entry.size
        except OSError as e:
            logger.warning(f"Cannot read size of {entry.path}: {e}")

        parent = resolve_parent_folder(entry, genre, root)
        logger.debug(f"Parent {parent}")

        if genre is None or parent is None or genre.lower() != parent.lower():
            rip.parent_folder = parent

        logger.info(f"Found movie {rip}")

        if not rips.add(rip):
            logger.info(f"Found duplicate movie {rip} at {entry.path}")
