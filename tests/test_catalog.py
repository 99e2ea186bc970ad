"""
Tests for BookCatalog lending rules and BookRepository storage.
"""
import random

import pytest

from library_catalog import BookCatalog, BookRepository
from library_errors import (
    AlreadyBorrowedError,
    BookIsBorrowedError,
    BookNotFoundError,
    CatalogError,
    DuplicateBookError,
    NotBorrowedError,
)
from library_logging import LogLevel
from library_records import BookRecord, CatalogStats


class TestBookRecord:

    def test_identity_ignores_year_and_borrowed(self):
        a = BookRecord("1984", "Orwell", 1949)
        b = BookRecord("1984", "Orwell", 1950, borrowed=True)
        assert a == b
        assert hash(a) == hash(b)
        assert a != BookRecord("1984", "Someone Else", 1949)

    def test_with_borrowed_returns_new_record(self):
        a = BookRecord("1984", "Orwell", 1949)
        b = a.with_borrowed(True)
        assert a.borrowed is False
        assert b.borrowed is True
        assert b.status == "borrowed"
        assert a.status == "available"
        assert b.key == ("1984", "Orwell")


class TestAddBook:

    def test_add_appends_available_record(self, catalog, sink):
        record = catalog.add_book("1984", "Orwell", 1949)
        assert record == BookRecord("1984", "Orwell", 1949)
        assert record.borrowed is False
        assert catalog.list_all() == [record]
        assert sink.lines[0] == (LogLevel.INFO, "Book '1984' added successfully.")

    def test_duplicate_is_rejected(self, orwell_catalog, sink):
        with pytest.raises(DuplicateBookError) as excinfo:
            orwell_catalog.add_book("1984", "Orwell", 1949)
        assert excinfo.value.title == "1984"
        assert excinfo.value.author == "Orwell"
        assert len(orwell_catalog) == 2
        assert sink.lines[-1] == (LogLevel.ERROR, "Book '1984' already exists in the library.")

    def test_same_title_different_author_is_allowed(self, orwell_catalog):
        orwell_catalog.add_book("1984", "Someone Else", 2001)
        assert len(orwell_catalog) == 3

    def test_errors_share_a_base_class(self, orwell_catalog):
        with pytest.raises(CatalogError):
            orwell_catalog.add_book("Animal Farm", "Orwell", 1945)


class TestBorrowAndReturn:

    def test_borrow_twice_fails(self, orwell_catalog, sink):
        orwell_catalog.borrow_book("1984")
        with pytest.raises(AlreadyBorrowedError):
            orwell_catalog.borrow_book("1984")
        assert orwell_catalog.stats().borrowed == 1
        assert (LogLevel.ERROR, "Book '1984' is already borrowed.") in sink.lines

    def test_borrow_unknown_title(self, orwell_catalog, sink):
        with pytest.raises(BookNotFoundError):
            orwell_catalog.borrow_book("Brave New World")
        assert sink.lines[-1] == (LogLevel.ERROR, "Book 'Brave New World' not found.")

    def test_borrow_picks_first_inserted_title(self, catalog):
        catalog.add_book("Dune", "Herbert", 1965)
        catalog.add_book("Dune", "Anderson", 2005)
        record = catalog.borrow_book("Dune")
        assert record.author == "Herbert"
        books = catalog.list_all()
        assert books[0].borrowed is True
        assert books[1].borrowed is False

    def test_return_borrowed_book(self, orwell_catalog, sink):
        orwell_catalog.borrow_book("1984")
        assert orwell_catalog.return_book("1984") is True
        assert sink.lines[-1] == (LogLevel.INFO, "Book '1984' returned successfully.")
        assert orwell_catalog.stats().borrowed == 0

    def test_return_available_book_only_warns(self, orwell_catalog, sink):
        before = [(b.key, b.borrowed) for b in orwell_catalog.list_all()]
        assert orwell_catalog.return_book("1984") is False
        assert sink.lines[-1] == (LogLevel.WARNING, "Book '1984' was not borrowed; nothing to return.")
        assert [(b.key, b.borrowed) for b in orwell_catalog.list_all()] == before

    def test_return_available_book_strict(self, sink):
        lib = BookCatalog(sink, strict_returns=True)
        lib.add_book("1984", "Orwell", 1949)
        with pytest.raises(NotBorrowedError):
            lib.return_book("1984")
        assert sink.lines[-1] == (LogLevel.ERROR, "Book '1984' was not borrowed.")

    def test_return_unknown_title(self, orwell_catalog):
        with pytest.raises(BookNotFoundError):
            orwell_catalog.return_book("Brave New World")

    def test_flag_tracks_successful_transitions(self, orwell_catalog):
        rng = random.Random(1984)
        expected = False
        for _ in range(200):
            if rng.random() < 0.5:
                try:
                    orwell_catalog.borrow_book("1984")
                    assert expected is False
                    expected = True
                except AlreadyBorrowedError:
                    assert expected is True
            else:
                returned = orwell_catalog.return_book("1984")
                assert returned is expected
                expected = False
            assert orwell_catalog.find_by_title("1984")[0].borrowed is expected


class TestRemoveBook:

    def test_remove_preserves_order(self, orwell_catalog):
        orwell_catalog.add_book("Crime and Punishment", "Dostoevsky", 1866)
        removed = orwell_catalog.remove_book("Animal Farm", "Orwell")
        assert removed.title == "Animal Farm"
        assert [b.title for b in orwell_catalog.list_all()] == ["1984", "Crime and Punishment"]

    def test_remove_borrowed_book_fails(self, orwell_catalog, sink):
        orwell_catalog.borrow_book("1984")
        before = [(b.key, b.borrowed) for b in orwell_catalog.list_all()]
        with pytest.raises(BookIsBorrowedError):
            orwell_catalog.remove_book("1984", "Orwell")
        assert sink.lines[-1] == (LogLevel.ERROR, "Cannot delete borrowed book '1984' by 'Orwell'.")
        assert [(b.key, b.borrowed) for b in orwell_catalog.list_all()] == before
        assert before == [(("1984", "Orwell"), True), (("Animal Farm", "Orwell"), False)]

    def test_remove_twice_fails_not_found(self, orwell_catalog, sink):
        orwell_catalog.borrow_book("Animal Farm")
        orwell_catalog.return_book("Animal Farm")
        orwell_catalog.remove_book("Animal Farm", "Orwell")
        with pytest.raises(BookNotFoundError):
            orwell_catalog.remove_book("Animal Farm", "Orwell")
        assert sink.lines[-1] == (LogLevel.ERROR, "Book 'Animal Farm' by 'Orwell' not found.")
        assert len(orwell_catalog) == 1

    def test_remove_requires_exact_author(self, orwell_catalog):
        with pytest.raises(BookNotFoundError):
            orwell_catalog.remove_book("1984", "orwell")


class TestQueries:

    def test_find_by_author_in_insertion_order(self, orwell_catalog, sink):
        orwell_catalog.add_book("Crime and Punishment", "Dostoevsky", 1866)
        found = orwell_catalog.find_by_author("Orwell")
        assert [b.title for b in found] == ["1984", "Animal Farm"]
        assert sink.lines[-1] == (LogLevel.INFO, "Found 2 book(s) by author 'Orwell'.")

    def test_find_by_author_no_match(self, orwell_catalog):
        assert orwell_catalog.find_by_author("Nonexistent") == []
        assert orwell_catalog.find_by_author("orwell") == []

    def test_find_by_title(self, orwell_catalog):
        orwell_catalog.add_book("1984", "Someone Else", 2001)
        found = orwell_catalog.find_by_title("1984")
        assert [b.author for b in found] == ["Orwell", "Someone Else"]
        assert orwell_catalog.find_by_title("Missing") == []

    def test_list_all_is_a_snapshot(self, orwell_catalog):
        books = orwell_catalog.list_all()
        books.clear()
        assert len(orwell_catalog.list_all()) == 2

    def test_queries_do_not_mutate(self, orwell_catalog):
        orwell_catalog.borrow_book("1984")
        before = [(b.key, b.borrowed) for b in orwell_catalog.list_all()]
        orwell_catalog.find_by_author("Orwell")
        orwell_catalog.find_by_title("1984")
        orwell_catalog.stats()
        after = [(b.key, b.borrowed) for b in orwell_catalog.list_all()]
        assert before == after

    def test_stats_consistent(self, orwell_catalog):
        assert orwell_catalog.stats() == CatalogStats(2, 0, 2)
        orwell_catalog.borrow_book("Animal Farm")
        stats = orwell_catalog.stats()
        assert stats == CatalogStats(2, 1, 1)
        assert stats.total == len(orwell_catalog.list_all())
        assert stats.borrowed + stats.available == stats.total

    def test_empty_catalog(self, catalog):
        assert catalog.list_all() == []
        assert catalog.stats() == CatalogStats(0, 0, 0)


class TestDefaults:

    def test_catalog_without_sink(self):
        lib = BookCatalog()
        lib.add_book("1984", "Orwell", 1949)
        with pytest.raises(DuplicateBookError):
            lib.add_book("1984", "Orwell", 1949)
        assert len(lib) == 1

    def test_shared_repository(self, sink):
        repo = BookRepository()
        lib = BookCatalog(sink, repository=repo)
        lib.add_book("1984", "Orwell", 1949)
        assert len(repo) == 1
        assert repo.index_of_title("1984") == 0
        assert repo.index_of("1984", "Orwell") == 0
        assert repo.index_of("1984", "Huxley") is None
