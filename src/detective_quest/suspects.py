"""
Suspect Index - maps each clue to the suspect it implicates.

A fixed-size hash table with separate chaining. Bucket placement uses the
djb2 string hash so that the layout is reproducible across runs and
platforms (Python's built-in hash() is salted per process).

Each clue appears at most once in the whole table. Putting a clue that is
already present replaces its suspect instead of adding a second entry.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from detective_quest.config import GAME_CONFIG


logger = logging.getLogger(__name__)

DJB2_SEED = 5381
HASH_MASK = 0xFFFFFFFFFFFFFFFF  # unsigned 64-bit wrap-around


def djb2(text: str) -> int:
    """
    Hash a string with djb2 (hash * 33 + byte) over its UTF-8 bytes.

    Args:
        text: The string to hash

    Returns:
        Unsigned 64-bit hash value
    """
    value = DJB2_SEED
    for byte in text.encode("utf-8"):
        value = (value * 33 + byte) & HASH_MASK
    return value


@dataclass
class SuspectEntry:
    """One link in a bucket chain."""
    clue: str
    suspect: str
    next: Optional["SuspectEntry"] = None


class SuspectIndex:
    """
    Chained hash table from clue text to suspect name.

    Lookups are exact and case-sensitive on the clue. The order of entries
    inside a bucket is an implementation detail: new entries are pushed at
    the head of the chain.
    """

    def __init__(self, size: int = GAME_CONFIG.hash_table_size):
        if not isinstance(size, int) or size <= 0:
            raise ValueError(f"Hash table size must be a positive integer, got {size!r}")
        self.size = size
        self._buckets: list[Optional[SuspectEntry]] = [None] * size
        self._count = 0

    def bucket_of(self, clue: str) -> int:
        """Get the bucket index a clue hashes to."""
        return djb2(clue) % self.size

    def put(self, clue: Optional[str], suspect: Optional[str]) -> None:
        """
        Associate a clue with a suspect.

        Missing or empty arguments are ignored. If the clue is already
        indexed its suspect is overwritten (last write wins).

        Args:
            clue: The clue text (exact key)
            suspect: The suspect the clue points to
        """
        if not clue or not suspect:
            return

        bucket = self.bucket_of(clue)
        entry = self._buckets[bucket]
        while entry is not None:
            if entry.clue == clue:
                logger.debug(f"Clue '{clue}' re-assigned from {entry.suspect} to {suspect}")
                entry.suspect = suspect
                return
            entry = entry.next

        self._buckets[bucket] = SuspectEntry(clue, suspect, self._buckets[bucket])
        self._count += 1
        logger.debug(f"Indexed clue '{clue}' -> {suspect} (bucket {bucket})")

    def get(self, clue: str) -> Optional[str]:
        """
        Find the suspect linked to a clue.

        Returns:
            The suspect name, or None if the clue is not indexed
        """
        entry = self._buckets[self.bucket_of(clue)]
        while entry is not None:
            if entry.clue == clue:
                return entry.suspect
            entry = entry.next
        return None

    def entries(self) -> Iterator[Tuple[str, str]]:
        """Iterate over every (clue, suspect) pair, bucket by bucket."""
        for head in self._buckets:
            entry = head
            while entry is not None:
                yield entry.clue, entry.suspect
                entry = entry.next

    def suspects(self) -> list[str]:
        """Get the distinct suspect names, sorted."""
        return sorted({suspect for _, suspect in self.entries()})

    def clear(self) -> None:
        """Drop every entry."""
        self._buckets = [None] * self.size
        self._count = 0

    def __contains__(self, clue: object) -> bool:
        return isinstance(clue, str) and self.get(clue) is not None

    def __len__(self) -> int:
        return self._count
