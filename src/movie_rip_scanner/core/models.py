"""Pydantic models for the movie rip scanner."""

from datetime import date, datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

# Sentinel for a release year that could not be read from the filename
UNKNOWN_RELEASE_YEAR = 0


class MovieRip(BaseModel):
    """A movie rip file, with what could be inferred from its path and name."""

    title: str = Field(..., description="Title derived from the filename")
    release_year: int = Field(
        default=UNKNOWN_RELEASE_YEAR, ge=0, description="Release year, 0 if unknown"
    )
    imdb_rating: float = Field(default=-1.0, description="IMDB rating, -1.0 if not rated")
    file_extension: str = Field(default="", description="Lower-cased extension including the dot")
    file_size_bytes: int = Field(default=0, ge=0, description="File size in bytes at scan time")
    genres: set[str] = Field(default_factory=set, description="Genres the rip was found under")
    parent_folder: str | None = Field(
        None, description="Enclosing folder name when it differs from the genre"
    )

    @field_validator("file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Lower-case the extension, keeping an empty one empty."""
        return v.lower()

    @property
    def sort_key(self) -> tuple[str, int, str]:
        """Natural ordering key, also used as the identity for duplicates."""
        return (self.title, self.release_year, self.file_extension)

    @property
    def release_date(self) -> date | None:
        """January 1st of the release year, or None when the year is unknown."""
        if self.release_year == UNKNOWN_RELEASE_YEAR:
            return None
        return date(self.release_year, 1, 1)

    @property
    def file_size_mb(self) -> float:
        """File size in megabytes."""
        return self.file_size_bytes / (1024 * 1024)

    # Equality, hashing and ordering all go through sort_key: rips that differ only in
    # size, genres or parent folder are the same rip.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MovieRip):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)

    def __lt__(self, other: "MovieRip") -> bool:
        if not isinstance(other, MovieRip):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        year = f" ({self.release_year})" if self.release_year else ""
        return f"{self.title}{year}{self.file_extension}"


class ScanResult(BaseModel):
    """Results from a movie rip scan."""

    scan_path: Path = Field(..., description="Directory that was scanned")
    rips: list[MovieRip] = Field(default_factory=list, description="Unique rips in sorted order")
    duplicates: list[MovieRip] = Field(
        default_factory=list, description="Rips rejected as duplicates, in discovery order"
    )
    files_visited: int = Field(default=0, ge=0, description="Regular files visited")
    directories_visited: int = Field(default=0, ge=0, description="Directories visited")
    scan_duration_seconds: float = Field(..., ge=0, description="Time taken to scan")
    scan_timestamp: datetime = Field(
        default_factory=datetime.now, description="When the scan was performed"
    )

    @property
    def rip_count(self) -> int:
        """Number of unique rips found."""
        return len(self.rips)

    @property
    def duplicate_count(self) -> int:
        """Number of rips rejected as duplicates."""
        return len(self.duplicates)

    @property
    def total_size_mb(self) -> float:
        """Total size of all unique rips in MB."""
        return sum(rip.file_size_mb for rip in self.rips)

    @property
    def genre_counts(self) -> dict[str, int]:
        """Number of rips per genre, sorted by genre name."""
        counts: dict[str, int] = {}
        for rip in self.rips:
            for genre in rip.genres:
                counts[genre] = counts.get(genre, 0) + 1
        return dict(sorted(counts.items()))

    def __str__(self) -> str:
        return (
            f"Scan of {self.scan_path}: {self.rip_count} movie rips, "
            f"{self.duplicate_count} duplicates"
        )


class DuplicatePolicy(str, Enum):
    """What to do when a rip with an already-seen sort key is found."""

    DROP = "drop"
    MERGE = "merge"


class ApplicationConfig(BaseModel):
    """Configuration settings for the application."""

    genres: list[str] = Field(
        default=[
            "Action",
            "Adventure",
            "Animation",
            "Comedy",
            "Crime",
            "Documentary",
            "Drama",
            "Family",
            "Fantasy",
            "Horror",
            "Musical",
            "Mystery",
            "Romance",
            "Sci-Fi",
            "Thriller",
            "War",
            "Western",
        ],
        description="Directory names recognized as genres (case-sensitive)",
    )
    included_extensions: list[str] = Field(
        default=[".avi", ".mkv", ".mp4", ".divx", ".mov"],
        description="File extensions to consider as movie rips",
    )
    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.DROP, description="Handling of rips with an existing sort key"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("genres")
    @classmethod
    def validate_genres(cls, v: list[str]) -> list[str]:
        """Require at least one genre."""
        if not v:
            raise ValueError("Genre list must not be empty.")
        return v

    @field_validator("included_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Require at least one extension; ensure each starts with a dot and is lowercase."""
        if not v:
            raise ValueError("Included file extensions must not be empty.")
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the logging level is a known level name, uppercased."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown logging level {v!r}.")
        return level

    @classmethod
    def from_json_file(cls, path: Path) -> "ApplicationConfig":
        """
        Load configuration from a JSON file.

        Args:
            path: Path to the JSON configuration file

        Returns:
            Validated ApplicationConfig

        Raises:
            ConfigurationError: If the file cannot be read or its content is invalid
        """
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

        try:
            return cls.model_validate_json(content)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e
