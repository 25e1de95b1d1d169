"""
Export parsed courses to ICS, CSV, and JSON.
"""
from __future__ import annotations

import csv
import hashlib
import io
import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, List

import icalendar
import pytz

from .course import TZ_NAME, Course
from .schedule_html import parse_schedule_html

CALENDAR_NAME = "University of Ottawa"
CAMPUS_SUFFIX = "Ottawa, ON, Canada"

RECORD_FIELDS = [
    "CODE",
    "NAME",
    "STATUS",
    "SECTION",
    "COMPONENT",
    "START",
    "END",
    "ROOM",
    "ADDRESS",
    "INSTRUCTOR",
    "TERM_END",
]


def _reminder() -> icalendar.Alarm:
    alarm = icalendar.Alarm()
    alarm.add("action", "DISPLAY")
    alarm.add("description", "Reminder")
    alarm.add("trigger", timedelta(minutes=-30))
    return alarm


def create_calendar(courses: Iterable[Course]) -> icalendar.Calendar:
    """Build a calendar with one weekly event per class of each enrolled course."""
    cal = icalendar.Calendar()
    cal.add("prodid", "-//uo2ics//University of Ottawa Schedule//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("x-wr-calname", CALENDAR_NAME)
    cal.add("x-wr-timezone", TZ_NAME)

    for course in courses:
        if not course.is_enrolled:
            continue
        for cls in course.classes:
            summary = f"{cls.room} ({cls.component.short}) {course.code}"

            event = icalendar.Event()

            # Deterministic UID
            uid_string = f"{course.code}-{cls.section}-{cls.component.short}-{cls.time.start.isoformat()}"
            uid_hash = hashlib.md5(uid_string.encode("utf-8")).hexdigest()
            event.add("uid", f"{uid_hash}@uo2ics")

            event.add("summary", summary)
            event.add("dtstart", cls.time.start)
            event.add("dtend", cls.time.end)
            event.add("dtstamp", datetime.now(timezone.utc))
            event.add("location", f"{cls.address}, {CAMPUS_SUFFIX}")
            event.add(
                "description",
                f"Name: {course.name} | Section: {cls.section} | Instructor: {cls.instructor}",
            )
            # UNTIL must be UTC when DTSTART carries a TZID
            event.add("rrule", {"freq": "weekly", "until": cls.end.astimezone(pytz.utc)})
            event.add_component(_reminder())

            cal.add_component(event)

    # VTIMEZONE for every TZID used by the events
    cal.add_missing_timezones()
    return cal


def calendar_text(courses: Iterable[Course]) -> str:
    return create_calendar(courses).to_ical().decode("utf-8")


def html_to_ics(html: str | bytes) -> str:
    """Convert a saved schedule page straight to calendar text."""
    return calendar_text(parse_schedule_html(html_content=html))


def class_records(courses: Iterable[Course]) -> List[dict]:
    """Flatten courses into one dict per class, Waiting courses included."""
    records = []
    for course in courses:
        for cls in course.classes:
            records.append({
                "CODE": course.code,
                "NAME": course.name,
                "STATUS": course.status.value,
                "SECTION": str(cls.section),
                "COMPONENT": cls.component.value,
                "START": cls.time.start.isoformat(),
                "END": cls.time.end.isoformat(),
                "ROOM": cls.room,
                "ADDRESS": cls.address,
                "INSTRUCTOR": cls.instructor,
                "TERM_END": cls.end.isoformat(),
            })
    return records


def csv_text(courses: Iterable[Course]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=RECORD_FIELDS)
    w.writeheader()
    w.writerows(class_records(courses))
    return buf.getvalue()


def json_text(courses: Iterable[Course]) -> str:
    return json.dumps(class_records(courses), indent=2, ensure_ascii=False)


def _write(text: str, out_path: str | Path | None) -> None:
    if out_path is None:
        sys.stdout.write(text)
    else:
        Path(out_path).write_text(text, encoding="utf-8", newline="")


def export_ics(courses: Iterable[Course], out_path: str | Path | None) -> None:
    """Export to iCalendar (.ics) for Apple/Google calendar."""
    _write(calendar_text(courses), out_path)


def export_csv(courses: Iterable[Course], out_path: str | Path | None) -> None:
    _write(csv_text(courses), out_path)


def export_json(courses: Iterable[Course], out_path: str | Path | None) -> None:
    _write(json_text(courses), out_path)


def export(courses: Iterable[Course], out_path: str | Path | None, fmt: str) -> None:
    """Export to the given format: ics, csv, or json. ``out_path`` None means stdout."""
    fmt = fmt.lower()
    if fmt == "ics":
        export_ics(courses, out_path)
    elif fmt == "csv":
        export_csv(courses, out_path)
    elif fmt == "json":
        export_json(courses, out_path)
    else:
        raise ValueError(f"Unsupported format: {fmt}. Use ics, csv, or json.")
