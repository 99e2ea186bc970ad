"""
library_records.py
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import NamedTuple, Tuple

STATUS_BORROWED = "borrowed"
STATUS_AVAILABLE = "available"


@dataclass(frozen=True)
class BookRecord:
    """
    A single book held by the catalog.

    Two records are the same book when title and author match; year and the
    borrowed flag are ignored for equality and hashing. Records are immutable,
    a state change yields a new record via `with_borrowed`.
    """

    title: str
    author: str
    year: int = field(compare=False)
    borrowed: bool = field(default=False, compare=False)

    @property
    def key(self) -> Tuple[str, str]:
        return self.title, self.author

    @property
    def status(self) -> str:
        return STATUS_BORROWED if self.borrowed else STATUS_AVAILABLE

    def with_borrowed(self, borrowed: bool) -> "BookRecord":
        """Return a copy of this record with the borrowed flag set to `borrowed`."""
        return replace(self, borrowed=bool(borrowed))


class CatalogStats(NamedTuple):
    """Counts computed from the current catalog contents."""

    total: int
    borrowed: int
    available: int
