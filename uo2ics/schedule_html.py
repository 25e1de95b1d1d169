"""
Parse the uOttawa "My Class Schedule" page (list view, saved from the
student centre) into Course / Class records.

The real HTML structure (PeopleSoft):
- Each course block starts with an element of class PAGROUPDIVIDER whose
  text is "<code> - <name>", e.g. "ADM 1100 - Introduction to Business".
- Two ancestors up is the block container. Inside it, elements of class
  PSLEVEL3GRID hold the tables:
    1. status grid: first cell is "Enrolled" or "Waiting"
    2. class grid: 7 cells per meeting
       | Class Nbr | Section | Component | Days & Times | Room | Instructor | Start/End Date |
- A cell's value is the text of its first <span>. Section and Component
  are left blank (&nbsp;) when they repeat the row above.

The export has one known layout; anything else raises a ParseError.
"""
from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

import pytz
from bs4 import BeautifulSoup, Tag  # type: ignore[import]

from .course import (
    TZ_NAME,
    Class,
    Component,
    Course,
    DateTimeRangeRaw,
    Section,
    Status,
)
from .errors import StructuralParseError, ValueParseError

GROUP_CLASS = "PAGROUPDIVIDER"
GRID_CLASS = "PSLEVEL3GRID"

# Cell text meaning "same as previous row"
BLANK = "\xa0"

CHUNK_SIZE = 7

Chunk = Tuple[str, str, str, str, str, str, str]


# ──────────────────────────────────────────────────────────────────
#  Record extraction
# ──────────────────────────────────────────────────────────────────

def iter_course_nodes(soup: BeautifulSoup) -> Iterator[Tag]:
    """Yield each course group divider in document order, one at a time."""
    for el in soup.descendants:
        if isinstance(el, Tag) and GROUP_CLASS in el.get("class", []):
            yield el


def _cell_texts(grid: Tag) -> List[str]:
    # Not stripped: str.strip() would eat the BLANK marker too.
    texts = []
    for td in grid.find_all("td"):
        span = td.find("span")
        texts.append(span.get_text() if span else BLANK)
    return texts


def _split_title(text: str) -> tuple[str, str]:
    """Split 'ADM 1100 - Introduction to Business' → ('ADM 1100', 'Introduction to Business')."""
    code, sep, name = text.strip().partition(" - ")
    if not sep:
        raise ValueParseError(f"Course title has no ' - ' separator: {text!r}")
    return code.strip(), name.strip()


def parse_course_node(node: Tag, first_day: date | None = None) -> Course:
    container = node.parent.parent if node.parent is not None else None
    if container is None:
        raise StructuralParseError(f"Course divider {node.get_text(strip=True)!r} has no container")

    grids = container.find_all(class_=GRID_CLASS)
    if len(grids) < 2:
        raise StructuralParseError(
            f"Expected status and class grids for {node.get_text(strip=True)!r}, found {len(grids)}"
        )

    head = _cell_texts(grids[0])
    if not head:
        raise StructuralParseError(f"Status grid for {node.get_text(strip=True)!r} has no cells")
    status = Status.from_text(head[0])

    code, name = _split_title(node.get_text())
    classes = build_classes(_cell_texts(grids[1]), first_day=first_day)
    return Course(code=code, name=name, status=status, classes=classes)


def parse_courses(soup: BeautifulSoup, first_day: date | None = None) -> List[Course]:
    """Parse every course block in the document."""
    return [parse_course_node(node, first_day) for node in iter_course_nodes(soup)]


# ──────────────────────────────────────────────────────────────────
#  Schedule building
# ──────────────────────────────────────────────────────────────────

def chunk_cells(cells: Sequence[str]) -> List[Chunk]:
    if len(cells) % CHUNK_SIZE:
        raise StructuralParseError(
            f"Class grid has {len(cells)} cells, not a multiple of {CHUNK_SIZE}"
        )
    return [tuple(cells[i:i + CHUNK_SIZE]) for i in range(0, len(cells), CHUNK_SIZE)]


def split_location(text: str) -> tuple[str, str]:
    """Split 'STE 1234 (University Centre)' → ('STE 1234', 'University Centre')."""
    address, sep, room = text.partition(" (")
    if not sep:
        raise ValueParseError(f"Location has no ' (' separator: {text!r}")
    return address, room.replace(")", "")


def parse_term_dates(text: str, tz: str = TZ_NAME) -> tuple[datetime, datetime]:
    """
    Parse '09/04/2024 - 12/20/2024' into the term's first and last moments.

    Term start is local midnight of the first date. Term end is 23:59:59
    local time on the last date, so a class held that day is still included
    by the recurrence rule.
    """
    parts = text.split(" - ")
    if len(parts) != 2:
        raise ValueParseError(f"Malformed start/end dates: {text!r}")
    try:
        first, last = (datetime.strptime(p.strip(), "%m/%d/%Y").date() for p in parts)
    except ValueError:
        raise ValueParseError(f"Malformed start/end dates: {text!r}") from None
    zone = pytz.timezone(tz)
    start = zone.localize(datetime.combine(first, time(0, 0)))
    end = zone.localize(datetime.combine(last, time(23, 59, 59)))
    return start, end


def _inherit(value: str, previous: Optional[Class], field: str, parse):
    if value != BLANK:
        return parse(value)
    if previous is None:
        raise ValueParseError(f"Blank {field} on the first class of a course")
    return getattr(previous, field)


def build_class(chunk: Chunk, previous: Optional[Class], first_day: date | None = None) -> Class:
    """Resolve one 7-cell chunk. Blank section/component repeat ``previous``."""
    _, section, component, time_text, location, instructor, dates = chunk

    resolved_section = _inherit(section, previous, "section", Section.parse)
    resolved_component = _inherit(component, previous, "component", Component.from_text)
    raw = DateTimeRangeRaw.parse(time_text)
    address, room = split_location(location)
    term_start, term_end = parse_term_dates(dates)

    return Class(
        section=resolved_section,
        component=resolved_component,
        time=raw.anchor(first_day or term_start),
        room=room,
        address=address,
        instructor=instructor,
        end=term_end,
    )


def build_classes(cells: Sequence[str], first_day: date | None = None) -> Tuple[Class, ...]:
    classes: List[Class] = []
    previous: Optional[Class] = None
    for chunk in chunk_cells(cells):
        previous = build_class(chunk, previous, first_day)
        classes.append(previous)
    return tuple(classes)


# ──────────────────────────────────────────────────────────────────
#  Public API
# ──────────────────────────────────────────────────────────────────

def parse_schedule_html(
    html_path: str | Path | None = None,
    html_content: str | bytes | None = None,
    first_day: date | None = None,
) -> List[Course]:
    """
    Parse a saved "My Class Schedule" HTML page.

    :param html_path: Path to the saved HTML file.
    :param html_content: Raw HTML (alternative to html_path).
    :param first_day: Anchor date for every class. Defaults to each class's
        own start date from the Start/End Date column.
    :returns: Courses in document order, Waiting ones included.
    """
    if html_content is not None:
        html = html_content
    elif html_path is not None:
        html = Path(html_path).read_text(encoding="utf-8", errors="ignore")
    else:
        raise ValueError("Provide either html_path or html_content.")

    soup = BeautifulSoup(html, "html.parser")
    courses = parse_courses(soup, first_day)
    if not courses:
        raise StructuralParseError(
            f"No course blocks (class {GROUP_CLASS}) found in the HTML.\n"
            "Save the 'My Class Schedule' page in list view and try again."
        )
    return courses
