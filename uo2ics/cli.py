"""
Command-line interface: convert a saved uOttawa schedule page to a calendar file.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .errors import ParseError
from .export import export
from .schedule_html import parse_schedule_html
from .term import parse_term_start


def _output_path(output: str | None, fmt: str) -> Path | None:
    if output is None:
        return None
    path = Path(output)
    return path if path.suffix else path.with_suffix("." + fmt)


def _list_courses(courses) -> None:
    print("Code        | Status   | Classes | Course Title")
    print("-" * 60)
    for c in courses:
        print(f"{c.code:<11} | {c.status.value:<8} | {len(c.classes):<7} | {c.name[:40]}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="uo2ics",
        description=(
            "Convert a saved uOttawa 'My Class Schedule' page (list view) to ICS / CSV / JSON.\n"
            "Only Enrolled courses are put in the calendar; Waiting courses are skipped."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "path",
        nargs="?",
        metavar="FILE",
        help="Saved schedule HTML. Reads standard input when omitted.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output path (extension added from --format if missing). Writes to standard output when omitted.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["ics", "csv", "json"],
        default="ics",
        help="Export format. Default: ics",
    )
    parser.add_argument(
        "--term-start",
        metavar="YYYY-MM-DD|auto",
        help="First day of the term, used to place every class on the calendar. "
        "'auto' picks the first Wednesday of the upcoming January/May/September term. "
        "Default: each class's own start date from the Start/End Date column.",
    )
    parser.add_argument(
        "--list-courses",
        action="store_true",
        help="List all courses in the HTML (code, status, number of classes, title) then exit.",
    )
    args = parser.parse_args(argv)

    first_day = None
    if args.term_start:
        try:
            first_day = parse_term_start(args.term_start)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    try:
        if args.path:
            courses = parse_schedule_html(html_path=args.path, first_day=first_day)
        else:
            courses = parse_schedule_html(html_content=sys.stdin.read(), first_day=first_day)
    except OSError as e:
        print(f"Error reading schedule HTML: {e}", file=sys.stderr)
        return 1
    except ParseError as e:
        print(f"Error parsing schedule HTML: {e}", file=sys.stderr)
        return 1

    if args.list_courses:
        _list_courses(courses)
        return 0

    out_path = _output_path(args.output, args.format)
    export(courses, out_path, args.format)
    if out_path is not None:
        print(f"Exported {len(courses)} course(s) to {out_path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
