import html

import pytest

# One class meeting, in grid column order
LECTURE_ROW = ["", "A00", "Lecture", "Mo 10:00AM - 11:20AM", "STE 1234 (Theatre)", "Dr. Smith", "09/04/2024 - 12/20/2024"]


def _cell(value) -> str:
    if value is None:
        return "<td></td>"
    return f"<td><span>{html.escape(value)}</span></td>"


def _course_block(title: str, status: str, rows: list) -> str:
    """
    Minimal copy of one PeopleSoft course block:
    divider cell, status grid, class grid.
    """
    data = "".join("<tr>" + "".join(_cell(v) for v in row) + "</tr>" for row in rows)
    return f"""
    <table class="PSGROUPBOXWBO">
    <tr><td class="PAGROUPDIVIDER" align="left">{html.escape(title)}</td></tr>
    <tr><td>
      <table class="PSLEVEL3GRID">
        <tr><th>Status</th><th>Units</th><th>Grading</th></tr>
        <tr>{_cell(status)}{_cell("3.00")}{_cell("Graded")}</tr>
      </table>
    </td></tr>
    <tr><td>
      <table class="PSLEVEL3GRID">
        <tr><th>Class Nbr</th><th>Section</th><th>Component</th><th>Days &amp; Times</th>
            <th>Room</th><th>Instructor</th><th>Start/End Date</th></tr>
        {data}
      </table>
    </td></tr>
    </table>
    """


def build_schedule_html(courses: list) -> str:
    """courses: list of (title, status, rows); a row cell of None has no <span>."""
    blocks = "".join(_course_block(*c) for c in courses)
    return f"<html><body><div id='win0divSTDNT_ENRL_SSV2$0'>{blocks}</div></body></html>"


@pytest.fixture
def make_schedule_html():
    return build_schedule_html


@pytest.fixture
def lecture_row():
    return list(LECTURE_ROW)


@pytest.fixture
def single_course_html():
    return build_schedule_html([("ADM 1100 - Introduction to Business", "Enrolled", [LECTURE_ROW])])
