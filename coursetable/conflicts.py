"""
Clash detection.

Given parsed courses, detect class meetings and exams that overlap.
Overlap rule:
    start < other_end AND end > other_start

Two classes only clash if they share a weekday AND at least one teaching week.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple, Union

from coursetable.model import Class, Course, Exam


@dataclass
class ClashEntry:
    course: Course
    item: Union[Class, Exam]

    def label(self) -> str:
        if isinstance(self.item, Exam):
            return f"{self.course.code} exam {self.item.to_date().isoformat()} {self.item.period}"
        return f"{self.course.code} {self.item.class_type} {self.item.weekday.abbr} {self.item.period}"


Clash = Tuple[ClashEntry, ClashEntry]


def _exam_date(exam: Exam) -> Optional[date]:
    try:
        return exam.to_date()
    except ValueError:
        return None


def find_class_clashes(courses: List[Course]) -> List[Clash]:
    """
    Find overlapping class pairs (A,B), each pair appears once, in scan order.
    """
    # Pre-filter classes with an unusable period (end <= start or out of range)
    entries = [
        (ClashEntry(course, cls), set(cls.weeks))
        for course in courses
        for cls in course.classes
        if cls.period.is_valid()
    ]

    clashes: List[Clash] = []
    for i in range(len(entries)):
        a, a_weeks = entries[i]
        for j in range(i + 1, len(entries)):
            b, b_weeks = entries[j]
            if a.item.weekday != b.item.weekday:
                continue
            if not a_weeks & b_weeks:
                continue
            if a.item.period.overlaps(b.item.period):
                clashes.append((a, b))
    return clashes


def find_exam_clashes(courses: List[Course]) -> List[Clash]:
    entries = []
    for course in courses:
        exam = course.exam
        if exam is None or not exam.period.is_valid():
            continue
        day = _exam_date(exam)
        if day is None:
            continue
        entries.append((ClashEntry(course, exam), day))

    clashes: List[Clash] = []
    for i in range(len(entries)):
        a, a_day = entries[i]
        for j in range(i + 1, len(entries)):
            b, b_day = entries[j]
            if a_day == b_day and a.item.period.overlaps(b.item.period):
                clashes.append((a, b))
    return clashes


def find_clashes(courses: List[Course]) -> List[Clash]:
    return find_class_clashes(courses) + find_exam_clashes(courses)
