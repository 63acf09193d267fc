"""
Parsing (flattened timetable text -> list of Course objects).

The export is one long stream of tab separated cells. Newlines are only
visual noise: every 16 cells form one row.

Row rules (in this order):
- all six header cells filled -> a new course starts
- exam cell filled -> exam of the current course
- class type filled -> one class meeting of the current course
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from coursetable.errors import (
    CourseValidationError,
    FieldParseError,
    MissingColumnsError,
    RowFieldError,
    UnknownCourseError,
)
from coursetable.fields import TEACHING_WEEK_MARKER, parse_exam, parse_period, parse_weekday, parse_weeks
from coursetable.model import Class, Course

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Table layout
# ---------------------------------------------------------------------------

NUM_COLUMNS = 16

COL_CODE = 0
COL_TITLE = 1
COL_AU = 2
COL_COURSE_TYPE = 3
COL_INDEX = 6
COL_STATUS = 7
COL_CLASS_TYPE = 9
COL_GROUP = 10
COL_WEEKDAY = 11
COL_PERIOD = 12
COL_VENUE = 13
# exam block or "Teaching Wk..." list, depending on the row
COL_REMARK = 14


# ---------------------------------------------------------------------------
# Course header
# ---------------------------------------------------------------------------


def new_course(code: str, title: str, au: str, course_type: str, index: str, status: str) -> Course:
    """
    Build an empty Course if all six header fields are filled.

    Raises CourseValidationError otherwise; the scanner reads that as
    "this row continues the current course".
    """
    fields = [code, title, au, course_type, index, status]
    if any(not f.strip() for f in fields):
        raise CourseValidationError("course header is incomplete")
    return Course(*[f.strip() for f in fields])


# ---------------------------------------------------------------------------
# Table scanning (CORE LOGIC)
# ---------------------------------------------------------------------------


def split_rows(raw_text: str) -> List[List[str]]:
    """
    Drop newlines, split on tabs and cut the cells into rows of NUM_COLUMNS.

    The last row may be shorter; parse_table reports it.
    """
    cells = raw_text.replace("\r", "").replace("\n", "").split("\t")
    return [
        [c.strip() for c in cells[i:i + NUM_COLUMNS]]
        for i in range(0, len(cells), NUM_COLUMNS)
    ]


class _TableScanner:
    """
    Accumulates courses row by row. The current course is always the last one.
    """

    def __init__(self) -> None:
        self.courses: List[Course] = []

    @property
    def current(self) -> Optional[Course]:
        return self.courses[-1] if self.courses else None

    def _field(self, row_index: int, column: str, text: str, parse: Callable[[str], T]) -> T:
        try:
            return parse(text)
        except FieldParseError as exc:
            raise RowFieldError(row_index, column, text, exc) from exc

    def scan_row(self, row_index: int, row: List[str]) -> None:
        try:
            course = new_course(
                row[COL_CODE],
                row[COL_TITLE],
                row[COL_AU],
                row[COL_COURSE_TYPE],
                row[COL_INDEX],
                row[COL_STATUS],
            )
        except CourseValidationError:
            pass
        else:
            logger.debug("Row %d: new course %s (%s)", row_index, course.code, course.index)
            self.courses.append(course)

        remark = row[COL_REMARK]
        if remark and TEACHING_WEEK_MARKER not in remark:
            exam = self._field(row_index, "exam", remark, parse_exam)
            if self.current is None:
                raise UnknownCourseError(row_index, exam)
            logger.debug("Row %d: exam for %s", row_index, self.current.code)
            self.current.exam = exam

        class_type = row[COL_CLASS_TYPE]
        if not class_type:
            logger.debug("Row %d: no class", row_index)
            return

        cls = Class(
            weekday=self._field(row_index, "weekday", row[COL_WEEKDAY], parse_weekday),
            period=self._field(row_index, "period", row[COL_PERIOD], parse_period),
            venue=row[COL_VENUE],
            group=row[COL_GROUP],
            weeks=self._field(row_index, "weeks", remark, parse_weeks),
            class_type=class_type,
        )
        if self.current is None:
            raise UnknownCourseError(row_index, cls)
        logger.debug("Row %d: %s class for %s", row_index, class_type, self.current.code)
        self.current.classes.append(cls)


def parse_table(raw_text: str) -> List[Course]:
    """
    Parse a whole timetable export into courses, in first-seen order.

    Raises a TableParseError subclass naming the first bad row; nothing is
    returned for a partially valid table.
    """
    rows = split_rows(raw_text)

    scanner = _TableScanner()
    for i, row in enumerate(rows):
        # only the last row can be short
        if len(row) != NUM_COLUMNS:
            raise MissingColumnsError(i, len(row), NUM_COLUMNS)
        scanner.scan_row(i, row)

    logger.info("Parsed %d rows into %d courses", len(rows), len(scanner.courses))
    return scanner.courses


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def read_table_text(path: str | Path) -> str:
    """
    Read the raw export from a file, or from stdin when path is '-'.
    """
    if str(path) == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def parse_file(path: str | Path, html: bool = False) -> List[Course]:
    """
    Read an export (plain pasted text or a saved HTML page) and parse it.
    """
    text = read_table_text(path)
    if html:
        from coursetable.html_table import html_to_table_text

        text = html_to_table_text(text)
    return parse_table(text)


def courses_to_json(courses: List[Course]) -> str:
    return json.dumps([c.to_dict() for c in courses], ensure_ascii=False, indent=2)


def write_courses_json(courses: List[Course], out_path: str | Path) -> None:
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(courses_to_json(courses), encoding="utf-8")
