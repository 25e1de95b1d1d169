"""
Convert a uOttawa "My Class Schedule" HTML export into an iCalendar file.
"""
from __future__ import annotations

__version__ = "0.3.0"

from .course import Class, Component, Course, DateTimeRange, DateTimeRangeRaw, Section, Status
from .errors import ParseError, StructuralParseError, ValueParseError
from .schedule_html import parse_courses, parse_schedule_html

__all__ = [
    "Class",
    "Component",
    "Course",
    "DateTimeRange",
    "DateTimeRangeRaw",
    "ParseError",
    "Section",
    "Status",
    "StructuralParseError",
    "ValueParseError",
    "parse_courses",
    "parse_schedule_html",
]
