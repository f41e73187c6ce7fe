"""Core functionality for the movie rip scanner."""

from .collection import MovieRipCollection
from .entries import FileEntry, LocalFileEntry
from .exceptions import ConfigurationError, InvalidDirectoryError, MovieRipScannerError
from .models import (
    UNKNOWN_RELEASE_YEAR,
    ApplicationConfig,
    DuplicatePolicy,
    MovieRip,
    ScanResult,
)
from .parser import FilenameParser, PatternMatch, Unmatched
from .scanner import MovieRipScanner, resolve_parent_folder

__all__ = [
    "UNKNOWN_RELEASE_YEAR",
    "ApplicationConfig",
    "ConfigurationError",
    "DuplicatePolicy",
    "FileEntry",
    "FilenameParser",
    "InvalidDirectoryError",
    "LocalFileEntry",
    "MovieRip",
    "MovieRipCollection",
    "MovieRipScanner",
    "MovieRipScannerError",
    "PatternMatch",
    "ScanResult",
    "Unmatched",
    "resolve_parent_folder",
]
