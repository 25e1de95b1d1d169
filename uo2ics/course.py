"""
Value types for courses and class meetings read from the schedule export.

A ``Course`` owns its ``Class`` meetings. Each meeting starts life as a
``DateTimeRangeRaw`` (weekday + wall-clock times, no date) which is anchored
onto the first matching day of the term to give a ``DateTimeRange``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Tuple

import pytz

from .errors import ValueParseError

# uOttawa is in Ottawa; every time in the export is local wall-clock time.
TZ_NAME = "America/Toronto"

# Day abbreviations used in the export, Monday first.
WEEKDAYS = ("Mo", "Tu", "We", "Th", "Fr")

_SECTION_RE = re.compile(r"^([A-Za-z])(\d+)$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(AM|PM)?$")


class Status(Enum):
    Enrolled = "Enrolled"
    Waiting = "Waiting"

    @classmethod
    def from_text(cls, text: str) -> Status:
        try:
            return cls(text)
        except ValueError:
            raise ValueParseError(f"Unknown enrollment status: {text!r}") from None


class Component(Enum):
    Laboratory = "Laboratory"
    Lecture = "Lecture"
    Tutorial = "Tutorial"

    @property
    def short(self) -> str:
        """Three-letter tag used in event titles."""
        mappings = {
            Component.Laboratory: "LAB",
            Component.Lecture: "LEC",
            Component.Tutorial: "TUT",
        }
        return mappings[self]

    @classmethod
    def from_text(cls, text: str) -> Component:
        try:
            return cls(text)
        except ValueError:
            raise ValueParseError(f"Unknown class component: {text!r}") from None


@dataclass(frozen=True)
class Section:
    letter: str
    number: int

    @classmethod
    def parse(cls, text: str) -> Section:
        """Parse e.g. 'A00' or 'Z3' → Section('A', 0), Section('Z', 3)."""
        m = _SECTION_RE.match(text)
        if not m:
            raise ValueParseError(f"Malformed section: {text!r}")
        number = int(m.group(2))
        if number >= 100:
            raise ValueParseError(f"Section number >= 100: {text!r}")
        return cls(m.group(1), number)

    def __str__(self) -> str:
        return f"{self.letter}{self.number:02d}"


def parse_time(text: str) -> tuple[int, int]:
    """Parse '8:30AM' / '12:00PM' / '13:15' into 24-hour (hour, minute)."""
    m = _TIME_RE.match(text.strip())
    if not m:
        raise ValueParseError(f"Malformed time: {text!r}")
    hour, minute, ap = int(m.group(1)), int(m.group(2)), m.group(3)
    if ap == "PM" and hour != 12:
        hour += 12
    elif ap == "AM" and hour == 12:
        hour = 0
    if hour > 23 or minute > 59:
        raise ValueParseError(f"Time out of range: {text!r}")
    return hour, minute


@dataclass(frozen=True)
class DateTimeRange:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class DateTimeRangeRaw:
    """A weekly meeting slot not yet tied to a date. weekday: 0 = Monday."""

    weekday: int
    start: Tuple[int, int]
    end: Tuple[int, int]

    @classmethod
    def parse(cls, text: str) -> DateTimeRangeRaw:
        """Parse 'Mo 10:00AM - 11:20AM'."""
        day, sep, times = text.partition(" ")
        if not sep:
            raise ValueParseError(f"Malformed time range: {text!r}")
        if day not in WEEKDAYS:
            raise ValueParseError(f"Unknown weekday {day!r} in {text!r}")
        parts = times.split(" - ")
        if len(parts) != 2:
            raise ValueParseError(f"Malformed time range: {text!r}")
        return cls(WEEKDAYS.index(day), parse_time(parts[0]), parse_time(parts[1]))

    def days_from(self, weekday: int) -> int:
        """Days to move forward from ``weekday`` to reach this slot's weekday."""
        if weekday > self.weekday:
            return 7 - weekday + self.weekday
        return self.weekday - weekday

    def anchor(self, first_day: date | datetime, tz: str = TZ_NAME) -> DateTimeRange:
        """
        Place this slot on the first matching weekday on or after ``first_day``.

        Only the calendar date of ``first_day`` is used, read in ``tz`` when
        ``first_day`` is an aware datetime. The wall-clock times are
        localized in ``tz`` after moving the date so DST is applied for the
        day the class actually falls on.
        """
        zone = pytz.timezone(tz)
        if isinstance(first_day, datetime):
            if first_day.tzinfo is not None:
                first_day = first_day.astimezone(zone)
            first_day = first_day.date()
        day = first_day + timedelta(days=self.days_from(first_day.weekday()))
        start = zone.localize(datetime.combine(day, time(*self.start)))
        end = zone.localize(datetime.combine(day, time(*self.end)))
        return DateTimeRange(start, end)


@dataclass(frozen=True)
class Class:
    section: Section
    component: Component
    time: DateTimeRange
    room: str
    address: str
    instructor: str
    # last moment of the term; ends the weekly recurrence
    end: datetime


@dataclass(frozen=True)
class Course:
    code: str
    name: str
    status: Status
    classes: Tuple[Class, ...]

    @property
    def is_enrolled(self) -> bool:
        return self.status is Status.Enrolled
