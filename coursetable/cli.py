"""
CLI (Command Line Interface).

Quick terminal commands on a copy-pasted (or saved HTML) timetable export, e.g.:

    coursetable show <file>
    coursetable json <file> [-o out.json]
    coursetable clashes <file>
    coursetable export <file> <out.ics> --term-start 2024-08-12

<file> may be '-' to read the pasted text from stdin.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coursetable.conflicts import find_clashes
from coursetable.errors import CourseTableError
from coursetable.export_ics import export_courses_to_ics
from coursetable.model import Course
from coursetable.parse import courses_to_json, parse_file, write_courses_json

console = Console()


def _weeks_label(weeks: List[int]) -> str:
    """
    Compact week list for display: [1, 2, 3, 5] -> '1-3,5'.
    """
    parts: List[str] = []
    i = 0
    while i < len(weeks):
        j = i
        while j + 1 < len(weeks) and weeks[j + 1] == weeks[j] + 1:
            j += 1
        parts.append(str(weeks[i]) if i == j else f"{weeks[i]}-{weeks[j]}")
        i = j + 1
    return ",".join(parts)


def _cmd_show(args: argparse.Namespace, courses: list[Course]) -> int:
    """
    Print every course with its classes and exam.
    """
    if not courses:
        print("No courses found.")
        return 0

    for c in courses:
        table = Table(
            title=escape(f"{c.code} {c.title} | {c.au} AU | {c.course_type} | index {c.index} | {c.status}"),
            box=box.SIMPLE,
        )
        table.add_column("Type")
        table.add_column("Group")
        table.add_column("Day")
        table.add_column("Time")
        table.add_column("Venue")
        table.add_column("Weeks")
        for cls in c.classes:
            table.add_row(
                escape(cls.class_type),
                escape(cls.group),
                cls.weekday.abbr,
                str(cls.period),
                escape(cls.venue),
                _weeks_label(cls.weeks),
            )
        if c.exam:
            e = c.exam
            table.add_row("[yellow]EXAM[/]", "", f"{e.day:02d}-{e.month.abbr}-{e.year}", str(e.period), "", "")
        console.print(table)

    return 0


def _cmd_json(args: argparse.Namespace, courses: list[Course]) -> int:
    if args.out:
        write_courses_json(courses, args.out)
        print(f"Wrote {len(courses)} courses to: {args.out}")
    else:
        print(courses_to_json(courses))
    return 0


def _cmd_clashes(args: argparse.Namespace, courses: list[Course]) -> int:
    clashes = find_clashes(courses)
    if not clashes:
        print("No clashes found.")
        return 0

    print(f"Clashes found: {len(clashes)}")
    for a, b in clashes:
        print(f"- {a.label()}  <->  {b.label()}")
    return 0


def _cmd_export(args: argparse.Namespace, courses: list[Course]) -> int:
    """
    Export classes and exams into an iCalendar (.ics) file.
    """
    n = export_courses_to_ics(courses, args.out, args.term_start)
    print(f"Exported {n} events to: {args.out}")
    return 0


def _iso_date(text: str) -> date:
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursetable", description="Parse a copy-pasted course timetable")
    parser.add_argument("--html", action="store_true", help="Input is a saved HTML page, not pasted text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every row decision")
    sub = parser.add_subparsers(dest="command", required=True)

    p_show = sub.add_parser("show", help="Print courses, classes and exams")
    p_show.add_argument("file", type=str, help="Timetable export ('-' for stdin)")

    p_json = sub.add_parser("json", help="Print or write the parsed courses as JSON")
    p_json.add_argument("file", type=str, help="Timetable export ('-' for stdin)")
    p_json.add_argument("-o", "--out", type=str, default=None, help="Output file path (e.g. courses.json)")

    p_clashes = sub.add_parser("clashes", help="Show clashing classes and exams")
    p_clashes.add_argument("file", type=str, help="Timetable export ('-' for stdin)")

    p_export = sub.add_parser("export", help="Export classes and exams to .ics")
    p_export.add_argument("file", type=str, help="Timetable export ('-' for stdin)")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")
    p_export.add_argument(
        "--term-start",
        type=_iso_date,
        required=True,
        metavar="YYYY-MM-DD",
        help="A day in teaching week 1 (its Monday is used)",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        courses = parse_file(args.file, html=args.html)
    except (CourseTableError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1)

    if args.command == "show":
        raise SystemExit(_cmd_show(args, courses))
    if args.command == "json":
        raise SystemExit(_cmd_json(args, courses))
    if args.command == "clashes":
        raise SystemExit(_cmd_clashes(args, courses))
    if args.command == "export":
        raise SystemExit(_cmd_export(args, courses))

    raise SystemExit(2)
