from coursetable.errors import CourseTableError, TableParseError
from coursetable.model import Class, Course, Exam, Month, Period, Time, Weekday
from coursetable.parse import new_course, parse_table

__all__ = [
    "Class",
    "Course",
    "CourseTableError",
    "Exam",
    "Month",
    "Period",
    "TableParseError",
    "Time",
    "Weekday",
    "new_course",
    "parse_table",
]
