"""
Error types raised while parsing a timetable export.

Field parsers raise FieldParseError subclasses carrying the offending text.
The table scanner wraps them into a TableParseError that names the row.
"""

from __future__ import annotations

from typing import Any, Optional


class CourseTableError(Exception):
    pass


class CourseValidationError(CourseTableError):
    """A row does not carry all six course header fields."""


class FieldParseError(CourseTableError, ValueError):
    what = "field"

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        self.reason = reason
        msg = f"Unable to parse {self.what} from {text!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PeriodParseError(FieldParseError):
    what = "period"


class ExamParseError(FieldParseError):
    what = "exam"


class WeekdayParseError(FieldParseError):
    what = "weekday"


class WeeksParseError(FieldParseError):
    what = "weeks"

    def __init__(self, text: str, reason: str = "", token: Optional[str] = None) -> None:
        self.token = token
        super().__init__(text, reason)


class TableParseError(CourseTableError):
    def __init__(self, row_index: int, message: str) -> None:
        self.row_index = row_index
        super().__init__(f"Row {row_index}: {message}")


class MissingColumnsError(TableParseError):
    def __init__(self, row_index: int, found_count: int, expected_count: int) -> None:
        self.found_count = found_count
        self.expected_count = expected_count
        super().__init__(
            row_index,
            f"missing columns, expected {expected_count}, found {found_count}",
        )


class UnknownCourseError(TableParseError):
    """A class or exam row appeared before any course header."""

    def __init__(self, row_index: int, item: Any) -> None:
        self.item = item
        super().__init__(row_index, f"no course to attach {item!r} to")


class RowFieldError(TableParseError):
    def __init__(self, row_index: int, column: str, text: str, cause: FieldParseError) -> None:
        self.column = column
        self.text = text
        super().__init__(row_index, f"bad {column} field {text!r} ({cause})")


class TableNotFoundError(CourseTableError):
    """A saved HTML page holds no table with the expected layout."""
