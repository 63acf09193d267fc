"""
iCalendar (.ics) export.

We convert parsed courses into a calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar

Each class meeting becomes one event per teaching week; each exam becomes one event.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

from coursetable.model import Class, Course, Period, Time

logger = logging.getLogger(__name__)


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_local(day: date, t: Time) -> str:
    """
    Convert date + Time to ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    dt = datetime.combine(day, t.to_time())
    return dt.strftime("%Y%m%dT%H%M00")


def class_dates(cls: Class, term_start: date) -> List[date]:
    """
    Dates of a class: term_start is the Monday of teaching week 1.
    """
    monday = term_start - timedelta(days=term_start.weekday())
    return [monday + timedelta(weeks=week - 1, days=int(cls.weekday)) for week in cls.weeks]


def _event_lines(uid: str, day: date, period: Period, summary: str, location: str, description: str) -> Optional[List[str]]:
    if not period.is_valid():
        logger.warning("Skipping %s on %s: invalid period %s", summary, day, period)
        return None
    dtstart = _dt_local(day, period.start)
    dtend = _dt_local(day, period.end)

    lines = ["BEGIN:VEVENT"]
    lines.append(f"UID:{_ics_escape(uid)}")
    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    lines.append(f"DTSTAMP:{dtstamp}")
    lines.append(f"DTSTART:{dtstart}")
    lines.append(f"DTEND:{dtend}")
    lines.append(f"SUMMARY:{_ics_escape(summary)}")
    if location:
        lines.append(f"LOCATION:{_ics_escape(location)}")
    if description:
        lines.append(f"DESCRIPTION:{_ics_escape(description)}")
    lines.append("END:VEVENT")
    return lines


def export_courses_to_ics(courses: List[Course], out_path: str | Path, term_start: date) -> int:
    """
    Export classes and exams to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: List[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//CourseTable//EN")
    lines.append("CALSCALE:GREGORIAN")

    count = 0
    for course in courses:
        for cls in course.classes:
            summary = f"{course.code} {course.title} ({cls.class_type})"
            description = f"Index {course.index}, group {cls.group}" if cls.group else f"Index {course.index}"
            # duplicate teaching weeks would repeat the UID
            for day in sorted(set(class_dates(cls, term_start))):
                uid = f"{course.index}-{course.code}-{cls.class_type}-{cls.group}-{day:%Y%m%d}T{cls.period.start.hour:02d}{cls.period.start.minute:02d}"
                event = _event_lines(uid, day, cls.period, summary, cls.venue, description)
                if event:
                    lines.extend(event)
                    count += 1

        exam = course.exam
        if exam is None:
            continue
        try:
            exam_day = exam.to_date()
        except ValueError:
            logger.warning("Skipping exam of %s: invalid date %s", course.code, exam.to_dict())
            continue
        event = _event_lines(
            f"{course.index}-{course.code}-exam-{exam_day:%Y%m%d}",
            exam_day,
            exam.period,
            f"{course.code} {course.title} (Exam)",
            "",
            f"Index {course.index}",
        )
        if event:
            lines.extend(event)
            count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
