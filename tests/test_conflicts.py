"""
Unit tests for clash detection.

Definition used here:
- Two classes clash if they share a weekday, share a teaching week and overlap in time.
- Two exams clash if they are on the same date and overlap in time.
- Touching endpoints (end == start) is NOT a clash.
"""

import unittest

from coursetable.conflicts import find_class_clashes, find_clashes, find_exam_clashes
from coursetable.model import Class, Course, Exam, Month, Period, Time, Weekday


def _period(text: str) -> Period:
    start, end = text.split("-")
    sh, sm = start.split(":")
    eh, em = end.split(":")
    return Period(Time(int(sh), int(sm)), Time(int(eh), int(em)))


def _course(code: str, *classes: Class, exam: Exam = None) -> Course:
    c = Course(code, code, "3", "Core", code + "0", "Registered")
    c.classes.extend(classes)
    c.exam = exam
    return c


def _cls(weekday: Weekday, period: str, weeks=range(1, 14), class_type: str = "LEC") -> Class:
    return Class(weekday, _period(period), "LT1", "LE", list(weeks), class_type)


class TestClassClashes(unittest.TestCase):
    def test_overlap_same_day(self) -> None:
        courses = [
            _course("A", _cls(Weekday.MONDAY, "10:00-11:00")),
            _course("B", _cls(Weekday.MONDAY, "10:30-12:00")),
        ]
        clashes = find_class_clashes(courses)
        self.assertEqual(len(clashes), 1)
        a, b = clashes[0]
        self.assertEqual(a.course.code, "A")
        self.assertEqual(b.course.code, "B")
        self.assertIn("Mon 10:00-11:00", a.label())

    def test_no_overlap_touching_end(self) -> None:
        courses = [
            _course("A", _cls(Weekday.MONDAY, "10:00-11:00")),
            _course("B", _cls(Weekday.MONDAY, "11:00-12:00")),
        ]
        self.assertEqual(find_class_clashes(courses), [])

    def test_different_day_no_clash(self) -> None:
        courses = [
            _course("A", _cls(Weekday.MONDAY, "10:00-11:00")),
            _course("B", _cls(Weekday.TUESDAY, "10:30-12:00")),
        ]
        self.assertEqual(find_class_clashes(courses), [])

    def test_disjoint_weeks_no_clash(self) -> None:
        # odd/even week labs in the same slot
        courses = [
            _course("A", _cls(Weekday.FRIDAY, "14:00-16:00", weeks=[1, 3, 5])),
            _course("B", _cls(Weekday.FRIDAY, "14:00-16:00", weeks=[2, 4, 6])),
        ]
        self.assertEqual(find_class_clashes(courses), [])

    def test_classes_of_same_course_are_checked(self) -> None:
        courses = [_course("A", _cls(Weekday.MONDAY, "09:00-10:00"), _cls(Weekday.MONDAY, "09:30-10:30", class_type="TUT"))]
        self.assertEqual(len(find_class_clashes(courses)), 1)

    def test_invalid_period_skipped(self) -> None:
        courses = [
            _course("A", _cls(Weekday.MONDAY, "11:00-10:00")),
            _course("B", _cls(Weekday.MONDAY, "10:00-12:00")),
        ]
        self.assertEqual(find_class_clashes(courses), [])


class TestExamClashes(unittest.TestCase):
    def test_same_date_overlap(self) -> None:
        courses = [
            _course("A", exam=Exam(1, Month.DECEMBER, 2023, _period("09:00-11:00"))),
            _course("B", exam=Exam(1, Month.DECEMBER, 2023, _period("10:00-12:00"))),
            _course("C", exam=Exam(2, Month.DECEMBER, 2023, _period("10:00-12:00"))),
        ]
        clashes = find_exam_clashes(courses)
        self.assertEqual(len(clashes), 1)
        self.assertIn("exam 2023-12-01", clashes[0][0].label())

    def test_invalid_date_skipped(self) -> None:
        courses = [
            _course("A", exam=Exam(31, Month.FEBRUARY, 2023, _period("09:00-11:00"))),
            _course("B", exam=Exam(31, Month.FEBRUARY, 2023, _period("09:00-11:00"))),
        ]
        self.assertEqual(find_exam_clashes(courses), [])

    def test_find_clashes_combines_both(self) -> None:
        exam = Exam(1, Month.DECEMBER, 2023, _period("09:00-11:00"))
        courses = [
            _course("A", _cls(Weekday.MONDAY, "10:00-11:00"), exam=exam),
            _course("B", _cls(Weekday.MONDAY, "10:30-12:00"), exam=exam),
        ]
        self.assertEqual(len(find_clashes(courses)), 2)


if __name__ == "__main__":
    unittest.main()
