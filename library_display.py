"""
library_display.py

Console presentation of catalog contents. Nothing here touches catalog state;
callers pass in records or stats they already fetched.
"""

from __future__ import annotations
from typing import Iterable, Optional, Sequence, TextIO

from library_records import BookRecord, CatalogStats

LINE_PREFIX = "++===++"


def format_book(record: BookRecord) -> str:
    """Return the one-line listing entry for `record`, e.g. "++===++ 1984 (Orwell, 1949) - available"."""
    return f"{LINE_PREFIX} {record.title} ({record.author}, {record.year}) - {record.status}"


def print_books(records: Sequence[BookRecord], out: Optional[TextIO] = None) -> None:
    """
    Print the full book listing, or a short notice when there is nothing to list.

    Args:
        records: books in the order they should be shown.
        out: target stream; stdout when omitted.
    """
    if not records:
        print("The library has no books yet.", file=out)
        return
    print(f"List of books in the library ({len(records)}):", file=out)
    for record in records:
        print(format_book(record), file=out)


def print_matches(label: str, records: Iterable[BookRecord], out: Optional[TextIO] = None) -> None:
    """Print search results under `label`; prints nothing for an empty result."""
    records = list(records)
    if not records:
        return
    print(f"\n{label}:", file=out)
    for record in records:
        print(f"- {record.title} ({record.year})", file=out)


def print_stats(stats: CatalogStats, out: Optional[TextIO] = None) -> None:
    """
    Print the statistics block.

    Args:
        stats: counts from BookCatalog.stats().
        out: target stream; stdout when omitted.
    """
    print("\nLibrary Statistics:", file=out)
    print(f"{LINE_PREFIX} Total books: {stats.total}", file=out)
    print(f"{LINE_PREFIX} Borrowed books: {stats.borrowed}", file=out)
    print(f"{LINE_PREFIX} Available books: {stats.available}", file=out)
