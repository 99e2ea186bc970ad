"""
library_report.py

Tabular and graphical reports over a snapshot of catalog records.

Typical usage:
    records = catalog.list_all()
    print(books_frame(records))
    save_report(records, "library_report")
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Sequence, Union

import matplotlib.pyplot as plt
import pandas as pd

from library_records import STATUS_BORROWED, BookRecord, CatalogStats

logger = logging.getLogger("LibrarySystem")

BOOK_COLUMNS = ["Title", "Author", "Year", "Status"]
STATS_COLUMNS = ["Total", "Borrowed", "Available"]
AUTHOR_COLUMNS = ["Author", "Books", "Borrowed", "Available"]


def books_frame(records: Sequence[BookRecord]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per book, in catalog order.

    Returns columns: Title, Author, Year, Status ("borrowed"/"available").
    """
    rows = [{"Title": r.title, "Author": r.author, "Year": r.year, "Status": r.status} for r in records]
    return pd.DataFrame(rows, columns=BOOK_COLUMNS)


def stats_frame(stats: CatalogStats) -> pd.DataFrame:
    """Return a one-row DataFrame with columns Total, Borrowed, Available."""
    return pd.DataFrame([list(stats)], columns=STATS_COLUMNS)


def author_summary(records: Sequence[BookRecord]) -> pd.DataFrame:
    """
    Summarize holdings per author.

    Returns columns: Author, Books, Borrowed, Available, most books first and
    ties broken by author name.
    """
    df = books_frame(records)
    if df.empty:
        return pd.DataFrame(columns=AUTHOR_COLUMNS)
    df["is_borrowed"] = df["Status"] == STATUS_BORROWED
    summary = (df.groupby("Author", sort=False)
               .agg(Books=("Title", "size"), Borrowed=("is_borrowed", "sum"))
               .reset_index())
    summary["Books"] = summary["Books"].astype(int)
    summary["Borrowed"] = summary["Borrowed"].astype(int)
    summary["Available"] = summary["Books"] - summary["Borrowed"]
    summary = summary.sort_values(["Books", "Author"], ascending=[False, True], ignore_index=True)
    return summary[AUTHOR_COLUMNS]


def save_plot(fig, path: Path) -> None:
    """
    Save a matplotlib figure to disk ensuring the parent directory exists.

    Args:
        fig: matplotlib.figure.Figure instance.
        path: Path to the PNG file to write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)


def status_chart(stats: CatalogStats):
    """Bar chart of available vs borrowed books, each bar labelled with its count."""
    fig, ax = plt.subplots(figsize=(4, 3))
    labels = ["Available", "Borrowed"]
    values = [stats.available, stats.borrowed]
    bars = ax.bar(labels, values, color=["tab:green", "tab:red"])
    for bar, value in zip(bars, values):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), str(value),
                ha="center", va="bottom", fontsize=8)
    ax.set_title(f"Library status ({stats.total} books)")
    ax.set_ylabel("Books")
    return fig


def _stats_from_records(records: Sequence[BookRecord]) -> CatalogStats:
    """Count total and borrowed books in a snapshot."""
    total = len(records)
    borrowed = sum(1 for r in records if r.borrowed)
    return CatalogStats(total, borrowed, total - borrowed)


def save_report(records: Sequence[BookRecord], out_dir: Union[str, Path]) -> List[Path]:
    """
    Write the books, authors and stats tables as CSV plus a status chart.

    Args:
        records: catalog snapshot, e.g. from BookCatalog.list_all().
        out_dir: directory to write into; created when missing.

    Returns:
        Paths of the files written: books.csv, authors.csv, stats.csv, status.png.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    stats = _stats_from_records(records)

    written = []
    tables = {
        "books.csv": books_frame(records),
        "authors.csv": author_summary(records),
        "stats.csv": stats_frame(stats),
    }
    for name, df in tables.items():
        path = out_dir / name
        df.to_csv(path, index=False)
        written.append(path)
        logger.info("Saved %d rows to %s", len(df), path)

    chart_path = out_dir / "status.png"
    save_plot(status_chart(stats), chart_path)
    written.append(chart_path)
    logger.info("Saved status chart to %s", chart_path)
    return written
