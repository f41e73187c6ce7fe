"""Exception hierarchy for the movie rip scanner."""

from pathlib import Path


class MovieRipScannerError(Exception):
    """Base exception for all movie rip scanner errors."""


class InvalidDirectoryError(MovieRipScannerError):
    """Raised when the directory to scan is missing, not a directory, or unreadable."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path} {reason}")


class ConfigurationError(MovieRipScannerError):
    """Raised when the genre list or rip extensions are missing or malformed."""
