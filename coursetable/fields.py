"""
Field parsers.

Each function turns one trimmed table cell into a typed value or raises
the matching FieldParseError with the offending text attached.
"""

from __future__ import annotations

import logging
import re
from typing import List

from coursetable.errors import ExamParseError, PeriodParseError, WeekdayParseError, WeeksParseError
from coursetable.model import Exam, Month, Period, Time, Weekday

logger = logging.getLogger(__name__)

TEACHING_WEEK_MARKER = "Teaching Wk"

_PERIOD_RE = re.compile(r"(\d\d)(\d\d)to(\d\d)(\d\d)", re.ASCII)

# e.g. "/15-Nov-2023 0900to1100/" - the slashes are optional
_EXAM_RE = re.compile(
    r"(?P<day>\d{2})-(?P<month>[A-Z][a-z]{2})-(?P<year>\d{4}) "
    r"(?P<sh>\d{2})(?P<sm>\d{2})to(?P<eh>\d{2})(?P<em>\d{2})",
    re.ASCII,
)

_RANGE_RE = re.compile(r"(\d+)-(\d+)", re.ASCII)
_NUMBER_RE = re.compile(r"\d+", re.ASCII)

# longest range accepted, in weeks
MAX_WEEK_SPAN = 100


def _period(sh: str, sm: str, eh: str, em: str) -> Period:
    return Period(start=Time(int(sh), int(sm)), end=Time(int(eh), int(em)))


def parse_period(text: str) -> Period:
    """
    Parse 'HHMMtoHHMM' (e.g. '0830to1020') into a Period.

    The digit groups are taken as written, hours and minutes are not range checked.
    """
    m = _PERIOD_RE.fullmatch(text)
    if not m:
        raise PeriodParseError(text, "expected HHMMtoHHMM")
    return _period(*m.groups())


def parse_exam(text: str) -> Exam:
    """
    Parse an exam block like '/15-Nov-2023 0900to1100/' into an Exam.
    """
    matches = list(_EXAM_RE.finditer(text))
    if not matches:
        raise ExamParseError(text, "expected DD-Mon-YYYY HHMMtoHHMM")
    if len(matches) > 1:
        logger.warning("Found %d exam blocks in %r, using the first", len(matches), text)

    m = matches[0]
    month = Month.lookup(m.group("month"))
    if month is None:
        raise ExamParseError(text, f"unknown month {m.group('month')!r}")

    return Exam(
        day=int(m.group("day")),
        month=month,
        year=int(m.group("year")),
        period=_period(m.group("sh"), m.group("sm"), m.group("eh"), m.group("em")),
    )


def parse_weekday(text: str) -> Weekday:
    wd = Weekday.lookup(text)
    if wd is None:
        raise WeekdayParseError(text)
    return wd


def parse_weeks(text: str) -> List[int]:
    """
    Parse a week list like 'Teaching Wk1-3,5' into [1, 2, 3, 5].

    Ranges expand inclusively, tokens keep their input order and
    duplicates are not removed.
    """
    pos = text.find(TEACHING_WEEK_MARKER)
    if pos < 0:
        raise WeeksParseError(text, f"missing {TEACHING_WEEK_MARKER!r}")
    listing = text[pos + len(TEACHING_WEEK_MARKER):]

    weeks: List[int] = []
    for token in listing.split(","):
        token = token.strip()

        # week ranges
        m = _RANGE_RE.fullmatch(token)
        if m:
            start, end = int(m.group(1)), int(m.group(2))
            if end - start > MAX_WEEK_SPAN:
                raise WeeksParseError(text, f"week range {token!r} is too long", token=token)
            if start > end:
                logger.warning("Empty week range %r in %r", token, text)
            weeks.extend(range(start, end + 1))
            continue

        if not _NUMBER_RE.fullmatch(token):
            raise WeeksParseError(text, f"bad week number {token!r}", token=token)
        weeks.append(int(token))

    return weeks
