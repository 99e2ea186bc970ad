import sys
from pathlib import Path

import pytest

# Ensure the repository root is on sys.path for direct pytest runs
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from library_catalog import BookCatalog  # noqa: E402
from library_logging import BaseSink, LogLevel  # noqa: E402


class RecordingSink(BaseSink):
    """Keeps (level, message) pairs so tests can inspect what was logged."""

    def __init__(self):
        self.lines = []
        self.closed = False

    def log(self, level, message):
        self.lines.append((LogLevel(level), message))

    def close(self):
        self.closed = True

    def levels(self):
        return [level for level, _ in self.lines]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def catalog(sink):
    return BookCatalog(sink)


@pytest.fixture
def orwell_catalog(catalog):
    catalog.add_book("1984", "Orwell", 1949)
    catalog.add_book("Animal Farm", "Orwell", 1945)
    return catalog
