"""Filename parsing module for extracting movie title, release year and extension."""

import logging
import re
from dataclasses import dataclass

from .models import UNKNOWN_RELEASE_YEAR, MovieRip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternMatch:
    """Filename matched the title/year pattern."""

    raw_title: str
    year: int
    trailing: str


@dataclass(frozen=True)
class Unmatched:
    """Filename did not match the title/year pattern."""


ParseOutcome = PatternMatch | Unmatched


class FilenameParser:
    """Parses movie rip filenames such as ``Titanic (1997).mkv``."""

    # Title: letters, digits, whitespace and - ' , ! [ ] .
    # Year: optional 4 digits in parentheses right after the title
    # Trailing: the rest, usually the extension, possibly preceded by a qualifier like "part 1"
    # Quantifiers are possessive: a title that swallows the whole name leaves nothing
    # for the trailing group and the match fails instead of backtracking.
    TITLE_YEAR_PATTERN = re.compile(r"([-',!\[\]\.\w\s]++)(?:\((\d{4})\))?+(.++)", re.ASCII)

    EXTENSION_SEPARATOR = "."

    def get_file_extension(self, file_name: str) -> str:
        """
        Get the extension of a filename, separator included.

        Args:
            file_name: The filename

        Returns:
            Everything from the last '.' on, or an empty string if there is none

        Example:
            >>> FilenameParser().get_file_extension("Titanic (1997).MKV")
            '.MKV'
        """
        index = file_name.rfind(self.EXTENSION_SEPARATOR)
        if index < 0:
            return ""
        return file_name[index:]

    def match_filename(self, file_name: str) -> ParseOutcome:
        """
        Match a filename against the title/year pattern.

        Args:
            file_name: The filename to match

        Returns:
            PatternMatch with the captured groups, or Unmatched
        """
        match = self.TITLE_YEAR_PATTERN.search(file_name)
        if not match:
            return Unmatched()

        raw_title, year, trailing = match.groups()
        logger.debug(
            f"Matched {file_name!r}: title={raw_title!r} year={year!r} trailing={trailing!r}"
        )

        return PatternMatch(
            raw_title=raw_title,
            year=int(year) if year else UNKNOWN_RELEASE_YEAR,
            trailing=trailing,
        )

    def build_title(self, outcome: ParseOutcome, file_name: str, extension: str) -> str:
        """
        Build the movie title from a match outcome.

        A matched filename uses the trimmed title group, followed by any qualifier found
        between the year and the extension. An unmatched filename uses the name minus
        its extension, as-is.
        """
        if isinstance(outcome, Unmatched):
            logger.debug(f"Found unconventional filename {file_name!r}")
            return file_name.removesuffix(extension)

        title = outcome.raw_title.strip()
        if outcome.trailing and outcome.trailing != extension:
            qualifier = outcome.trailing.removesuffix(extension)
            logger.debug(f"Qualifier {qualifier!r} for {file_name!r}")
            title += qualifier
        return title

    def parse(self, file_name: str) -> MovieRip:
        """
        Parse a filename into a MovieRip with title, release year and extension.

        Genres, file size and parent folder are left for the scanner to fill in.

        Args:
            file_name: Bare filename, without directories

        Returns:
            MovieRip for the filename; never fails, unconventional names fall back
            to the name without extension as title

        Example:
            >>> rip = FilenameParser().parse("Titanic (1997).mkv")
            >>> rip.title, rip.release_year, rip.file_extension
            ('Titanic', 1997, '.mkv')
        """
        extension = self.get_file_extension(file_name)
        outcome = self.match_filename(file_name)
        title = self.build_title(outcome, file_name, extension)
        year = outcome.year if isinstance(outcome, PatternMatch) else UNKNOWN_RELEASE_YEAR

        return MovieRip(title=title, release_year=year, file_extension=extension)
