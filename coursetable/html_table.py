"""
Saved HTML page -> flattened timetable text.

Copy-pasting the timetable from the browser gives tab separated cells.
Saving the page instead gives HTML; this module turns that HTML into the
same token stream so both go through parse_table.
"""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup

from coursetable.errors import TableNotFoundError
from coursetable.parse import NUM_COLUMNS

logger = logging.getLogger(__name__)


def _table_rows(table) -> List[List[str]]:
    """
    Cell texts of all data rows. Rows made only of <th> cells are headers.
    """
    rows: List[List[str]] = []
    for tr in table.find_all("tr"):
        cells = tr.find_all(["td", "th"])
        if not cells or all(c.name == "th" for c in cells):
            continue
        rows.append([c.get_text(" ", strip=True) for c in cells])
    return rows


def _guess_timetable_table(soup: BeautifulSoup):
    """
    Pick the table whose rows are 16 cells wide, preferring the one with most rows.
    """
    best = None
    best_rows = 0
    for table in soup.find_all("table"):
        # nested tables are judged on their own
        if table.find("table"):
            continue
        rows = _table_rows(table)
        wide = [r for r in rows if len(r) == NUM_COLUMNS]
        if len(wide) > best_rows:
            best, best_rows = table, len(wide)
    return best


def html_to_table_text(html: str) -> str:
    """
    Return the timetable as tab separated text (rows end with a tab and a newline).

    Rows that are not 16 cells wide are dropped. Raises TableNotFoundError
    when the page has no 16 column table.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = _guess_timetable_table(soup)
    if table is None:
        raise TableNotFoundError("No 16 column timetable found in HTML page")

    lines: List[str] = []
    for row in _table_rows(table):
        if len(row) != NUM_COLUMNS:
            logger.warning("Skipping HTML row with %d cells: %r", len(row), row)
            continue
        # tabs inside a cell would shift every following column
        cells = [" ".join(c.split()) for c in row]
        lines.append("\t".join(cells))
    return "\t\n".join(lines)
