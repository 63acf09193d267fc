"""
Central data model definitions used across the project.

This module defines the canonical structure of Course, Class and Exam objects so that:
- the table scanner, the clash checker and the exporters share the same field names
- a parsed timetable can be printed, serialized or exported without re-parsing
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from enum import IntEnum
from typing import Any, List, Optional


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def abbr(self) -> str:
        return self.name[:3].title()

    @classmethod
    def lookup(cls, text: str) -> Optional["Weekday"]:
        """
        Case-insensitive lookup by full name ('Monday') or abbreviation ('Mon').
        """
        t = text.strip().upper()
        for wd in cls:
            if t in (wd.name, wd.name[:3]):
                return wd
        return None


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @property
    def abbr(self) -> str:
        return self.name[:3].title()

    @classmethod
    def lookup(cls, text: str) -> Optional["Month"]:
        t = text.strip().upper()
        for m in cls:
            if t in (m.name, m.name[:3]):
                return m
        return None


@dataclass(frozen=True)
class Time:
    hour: int
    minute: int

    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    def to_time(self) -> time:
        # raises ValueError for hour > 23 or minute > 59
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class Period:
    """
    A clock-time interval. start < end is expected but not enforced.
    """

    start: Time
    end: Time

    def is_valid(self) -> bool:
        return (
            0 <= self.start.hour <= 23
            and 0 <= self.end.hour <= 23
            and 0 <= self.start.minute <= 59
            and 0 <= self.end.minute <= 59
            and self.start.minutes() < self.end.minutes()
        )

    def overlaps(self, other: "Period") -> bool:
        # touching endpoints do not overlap
        return self.start.minutes() < other.end.minutes() and self.end.minutes() > other.start.minutes()

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Class:
    """
    Represents one weekly class meeting of a course (one row of the timetable).
    """

    weekday: Weekday
    period: Period
    venue: str
    group: str
    weeks: List[int] = field(hash=False)
    class_type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekday": self.weekday.abbr,
            "start": str(self.period.start),
            "end": str(self.period.end),
            "venue": self.venue,
            "group": self.group,
            "weeks": list(self.weeks),
            "class_type": self.class_type,
        }


@dataclass
class Exam:
    day: int
    month: Month
    year: int
    period: Period

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def to_dict(self) -> dict[str, Any]:
        try:
            iso: Optional[str] = self.to_date().isoformat()
        except ValueError:
            iso = None
        return {
            "day": self.day,
            "month": self.month.abbr,
            "year": self.year,
            "date": iso,
            "start": str(self.period.start),
            "end": str(self.period.end),
        }


@dataclass
class Course:
    """
    Represents one course as listed in the timetable export.

    Classes are appended in row order; the exam (if any) is set by a later row.
    """

    code: str
    title: str
    au: str
    course_type: str
    index: str
    status: str
    classes: List[Class] = field(default_factory=list)
    exam: Optional[Exam] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "title": self.title,
            "au": self.au,
            "course_type": self.course_type,
            "index": self.index,
            "status": self.status,
            "classes": [c.to_dict() for c in self.classes],
            "exam": self.exam.to_dict() if self.exam else None,
        }
