#!/usr/bin/env python3
"""
library_demo.py

Scripted walk through the catalog: adds a few books (one of them twice),
borrows and returns, searches by author, removes books and prints the final
statistics. Activity goes to the console and is appended to a log file.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from library_catalog import BookCatalog
from library_display import print_books, print_matches, print_stats
from library_errors import CatalogError
from library_logging import DEFAULT_LOG_FILE, build_sink
from library_report import save_report

# Logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger("LibrarySystem")


def _attempt(operation, *args) -> None:
    """Run one catalog operation, continuing past the errors it reports."""
    try:
        operation(*args)
    except CatalogError as exc:
        logger.debug("Demo step failed: %s", exc)


def demo_run(log_file: Optional[Union[str, Path]] = DEFAULT_LOG_FILE,
             report_dir: Optional[Union[str, Path]] = None) -> BookCatalog:
    """
    Run the demonstration sequence and return the catalog it built.

    Args:
        log_file: file to append activity lines to; console only when None.
        report_dir: when given, CSV tables and a status chart are written there.
    """
    with build_sink(console=True, log_file=log_file) as sink:
        lib = BookCatalog(sink)
        _attempt(lib.add_book, "1984", "Orwell", 1949)
        _attempt(lib.add_book, "Animal Farm", "Orwell", 1945)
        _attempt(lib.add_book, "Crime and Punishment", "Dostoevsky", 1866)
        _attempt(lib.add_book, "1984", "Orwell", 1949)

        _attempt(lib.borrow_book, "1984")
        _attempt(lib.borrow_book, "1984")
        print_books(lib.list_all())

        _attempt(lib.return_book, "1984")
        print_books(lib.list_all())

        print_matches("Books by Orwell", lib.find_by_author("Orwell"))

        _attempt(lib.remove_book, "Animal Farm", "Orwell")
        _attempt(lib.remove_book, "Nonexistent Book", "Nonexistent Author")

        print_stats(lib.stats())

        if report_dir is not None:
            save_report(lib.list_all(), report_dir)
    return lib


if __name__ == "__main__":
    demo_run()
