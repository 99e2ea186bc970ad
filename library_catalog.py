"""
library_catalog.py
"""

from __future__ import annotations
from typing import Iterator, List, Optional

from library_errors import (
    AlreadyBorrowedError,
    BookIsBorrowedError,
    BookNotFoundError,
    CatalogError,
    DuplicateBookError,
    NotBorrowedError,
)
from library_logging import LogLevel, LogSink, NullSink
from library_records import BookRecord, CatalogStats


class BookRepository:
    """
    Ordered in-memory storage for book records.

    Holds no business rules and does no logging. Lookups are linear scans
    that stop at the first match, so a title shared by several authors
    resolves to the earliest inserted record.
    """

    def __init__(self) -> None:
        self._records: List[BookRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[BookRecord]:
        return iter(list(self._records))

    def records(self) -> List[BookRecord]:
        """Return a copy of the stored records, in insertion order."""
        return list(self._records)

    def append(self, record: BookRecord) -> None:
        """Store `record` after every existing one."""
        self._records.append(record)

    def index_of_title(self, title: str) -> Optional[int]:
        """
        Find the position of the first record titled `title`.

        Returns the index, or None if no record has that title.
        """
        for i, record in enumerate(self._records):
            if record.title == title:
                return i
        return None

    def index_of(self, title: str, author: str) -> Optional[int]:
        """
        Find the position of the record matching both title and author.

        Returns the index, or None if the pair is not stored.
        """
        for i, record in enumerate(self._records):
            if record.title == title and record.author == author:
                return i
        return None

    def get(self, index: int) -> BookRecord:
        """Return the record stored at `index`."""
        return self._records[index]

    def replace(self, index: int, record: BookRecord) -> None:
        """Overwrite the record at `index`, keeping its position."""
        self._records[index] = record

    def delete(self, index: int) -> BookRecord:
        """Remove and return the record at `index`; later records move up by one."""
        return self._records.pop(index)


class BookCatalog:
    """
    BookCatalog applies the lending rules on top of a BookRepository.

    Each operation reports its outcome to the configured sink: INFO on
    success, ERROR right before raising a CatalogError. Query methods also log
    but never change catalog state.
    """

    def __init__(self,
                 sink: Optional[LogSink] = None,
                 repository: Optional[BookRepository] = None,
                 strict_returns: bool = False):
        """
        Initialize the catalog.

        Args:
            sink: where activity lines go; a NullSink when omitted.
            repository: storage to use; a fresh empty one when omitted.
            strict_returns: raise NotBorrowedError when returning a book that is
                not borrowed instead of only logging a warning.
        """
        self.sink = sink if sink is not None else NullSink()
        self.repository = repository if repository is not None else BookRepository()
        self.strict_returns = bool(strict_returns)

    def __len__(self) -> int:
        return len(self.repository)

    # -------------- Internal helpers ----------------
    def _fail(self, error: CatalogError) -> CatalogError:
        """Log `error` at ERROR level and hand it back for the caller to raise."""
        self.sink.log(LogLevel.ERROR, error.message)
        return error

    def _require_title(self, title: str) -> int:
        """Return the index of the first book titled `title`, raising BookNotFoundError if none."""
        index = self.repository.index_of_title(title)
        if index is None:
            raise self._fail(BookNotFoundError(title))
        return index

    # ---------------- Core operations ----------------
    def add_book(self, title: str, author: str, year: int) -> BookRecord:
        """
        Add a new, available book at the end of the catalog.

        Raises DuplicateBookError if the title/author pair is already present.
        """
        if self.repository.index_of(title, author) is not None:
            raise self._fail(DuplicateBookError(title, author))
        record = BookRecord(title, author, int(year))
        self.repository.append(record)
        self.sink.log(LogLevel.INFO, f"Book '{title}' added successfully.")
        return record

    def borrow_book(self, title: str) -> BookRecord:
        """
        Mark the first book with `title` as borrowed.

        Raises BookNotFoundError or AlreadyBorrowedError.
        """
        index = self._require_title(title)
        record = self.repository.get(index)
        if record.borrowed:
            raise self._fail(AlreadyBorrowedError(title))
        record = record.with_borrowed(True)
        self.repository.replace(index, record)
        self.sink.log(LogLevel.INFO, f"Book '{title}' borrowed successfully.")
        return record

    def return_book(self, title: str) -> bool:
        """
        Mark the first book with `title` as available again.

        Returning a book that is not borrowed only logs a warning and returns
        False, unless the catalog was built with strict_returns, in which case
        NotBorrowedError is raised. Raises BookNotFoundError if no book matches.
        """
        index = self._require_title(title)
        record = self.repository.get(index)
        if not record.borrowed:
            if self.strict_returns:
                raise self._fail(NotBorrowedError(title))
            self.sink.log(LogLevel.WARNING, f"Book '{title}' was not borrowed; nothing to return.")
            return False
        self.repository.replace(index, record.with_borrowed(False))
        self.sink.log(LogLevel.INFO, f"Book '{title}' returned successfully.")
        return True

    def remove_book(self, title: str, author: str) -> BookRecord:
        """
        Delete the book matching title and author.

        Raises BookNotFoundError, or BookIsBorrowedError while the book is out.
        """
        index = self.repository.index_of(title, author)
        if index is None:
            raise self._fail(BookNotFoundError(title, author))
        if self.repository.get(index).borrowed:
            raise self._fail(BookIsBorrowedError(title, author))
        record = self.repository.delete(index)
        self.sink.log(LogLevel.INFO, f"Book '{title}' by '{author}' deleted successfully.")
        return record

    # ---------------- Queries ----------------
    def find_by_author(self, author: str) -> List[BookRecord]:
        """Return every book by exactly `author` (case-sensitive), in catalog order."""
        found = [record for record in self.repository if record.author == author]
        self.sink.log(LogLevel.INFO, f"Found {len(found)} book(s) by author '{author}'.")
        return found

    def find_by_title(self, title: str) -> List[BookRecord]:
        """Return every book titled exactly `title` (case-sensitive), in catalog order."""
        found = [record for record in self.repository if record.title == title]
        self.sink.log(LogLevel.INFO, f"Found {len(found)} book(s) titled '{title}'.")
        return found

    def list_all(self) -> List[BookRecord]:
        """
        Return a snapshot of every book in catalog order.

        The list is a copy; changing it does not affect the catalog.
        """
        books = self.repository.records()
        self.sink.log(LogLevel.INFO, f"Listing {len(books)} book(s).")
        return books

    def stats(self) -> CatalogStats:
        """
        Count total, borrowed and available books.

        Always recomputed from the records so it matches the current state.
        """
        total = 0
        borrowed = 0
        for record in self.repository:
            total += 1
            if record.borrowed:
                borrowed += 1
        result = CatalogStats(total, borrowed, total - borrowed)
        self.sink.log(LogLevel.INFO,
                      f"Statistics: {result.total} total, {result.borrowed} borrowed, "
                      f"{result.available} available.")
        return result
