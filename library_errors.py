"""
library_errors.py

Errors raised by the catalog. All of them are recoverable: the catalog logs an
ERROR line and leaves its state unchanged before raising.
"""

from __future__ import annotations
from typing import Optional


class CatalogError(Exception):
    """Base class for catalog errors."""

    def __init__(self, message: str, title: str, author: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.title = title
        self.author = author


class DuplicateBookError(CatalogError):
    """A book with the same title and author is already in the catalog."""

    def __init__(self, title: str, author: str):
        super().__init__(f"Book '{title}' already exists in the library.", title, author)


class BookNotFoundError(CatalogError):
    """No book matches the requested title (and author, when given)."""

    def __init__(self, title: str, author: Optional[str] = None):
        if author is None:
            message = f"Book '{title}' not found."
        else:
            message = f"Book '{title}' by '{author}' not found."
        super().__init__(message, title, author)


class AlreadyBorrowedError(CatalogError):
    """Borrow requested for a book that is already out."""

    def __init__(self, title: str):
        super().__init__(f"Book '{title}' is already borrowed.", title)


class BookIsBorrowedError(CatalogError):
    """Removal requested for a book that is currently borrowed."""

    def __init__(self, title: str, author: str):
        super().__init__(f"Cannot delete borrowed book '{title}' by '{author}'.", title, author)


class NotBorrowedError(CatalogError):
    """Return requested for a book that was not borrowed (strict returns only)."""

    def __init__(self, title: str):
        super().__init__(f"Book '{title}' was not borrowed.", title)
