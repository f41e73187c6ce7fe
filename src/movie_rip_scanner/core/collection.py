"""Ordered, deduplicating collection of movie rips."""

import bisect
import logging
from collections.abc import Iterator

from .models import DuplicatePolicy, MovieRip

logger = logging.getLogger(__name__)


class MovieRipCollection:
    """
    Movie rips kept in ascending (title, release year, extension) order.

    Two rips with the same sort key are duplicates: the first one found is kept.
    Under DuplicatePolicy.MERGE the genres of the later rip are added to the kept one.
    """

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.DROP):
        self.duplicate_policy = duplicate_policy
        self._keys: list[tuple[str, int, str]] = []
        self._rips: list[MovieRip] = []
        self.duplicates: list[MovieRip] = []

    def _index_of(self, key: tuple[str, int, str]) -> int | None:
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            return index
        return None

    def add(self, rip: MovieRip) -> bool:
        """
        Insert a rip in sort order.

        Args:
            rip: The rip to insert

        Returns:
            True if the rip was added, False if it duplicates an existing one
        """
        key = rip.sort_key
        existing = self._index_of(key)

        if existing is not None:
            self.duplicates.append(rip)
            if self.duplicate_policy is DuplicatePolicy.MERGE:
                kept = self._rips[existing]
                kept.genres |= rip.genres
                logger.debug(f"Merged genres {sorted(rip.genres)} into {kept}")
            return False

        index = bisect.bisect_left(self._keys, key)
        self._keys.insert(index, key)
        self._rips.insert(index, rip)
        return True

    def get(self, key: tuple[str, int, str]) -> MovieRip | None:
        """Return the rip stored under a sort key, if any."""
        index = self._index_of(key)
        return self._rips[index] if index is not None else None

    def first(self) -> MovieRip | None:
        """Lowest-ordered rip."""
        return self._rips[0] if self._rips else None

    def last(self) -> MovieRip | None:
        """Highest-ordered rip."""
        return self._rips[-1] if self._rips else None

    def to_list(self) -> list[MovieRip]:
        """Rips as a new list, in order."""
        return list(self._rips)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, MovieRip):
            return False
        return self._index_of(item.sort_key) is not None

    def __iter__(self) -> Iterator[MovieRip]:
        return iter(list(self._rips))

    def __len__(self) -> int:
        return len(self._rips)

    def __bool__(self) -> bool:
        return bool(self._rips)

    def __repr__(self) -> str:
        return f"MovieRipCollection({len(self)} rips, {len(self.duplicates)} duplicates)"
