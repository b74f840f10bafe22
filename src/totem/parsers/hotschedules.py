"""HotSchedules staff-table scraper: maps each employee's jobs to a department."""

from __future__ import annotations

import html
from typing import Optional

from bs4 import BeautifulSoup, Tag

from totem.core.exceptions import ReportParseError
from totem.models.employee import Department
from totem.models.imports import DepartmentRow
from totem.parsers.names import collapse_whitespace, split_display_name

# Tried in order; the first selector that yields rows is used.
ROW_SELECTORS: tuple[str, ...] = (
    "#stafftable tbody tr",
    "table#stafftable tr",
    "table.data-table tbody tr",
)

# Ordered (department, job substring) rules; first match wins.
DEPARTMENT_RULES: tuple[tuple[Department, str], ...] = (
    (Department.PARTNER, "Dispatcher"),
    (Department.EXECUTIVE, "Mobile Drinks"),
    (Department.CENTRAL, "Lemons"),
    (Department.DIRECTOR, "Front Counter Stager"),
    (Department.BOH, "BOH General"),
    (Department.FOH, "FOH General"),
)

MIN_CELLS = 7
NAME_CELL, PREFERRED_CELL, JOBS_CELL = 1, 2, 6
EMPTY_MARKER = "-"


def map_department_from_jobs(value: str) -> Optional[Department]:
    """Map a ``" | "``-joined jobs string to a department, or ``None`` if no rule matches."""
    lowered = (value or "").strip().lower()
    if not lowered or lowered == EMPTY_MARKER:
        return Department.NONE
    for department, job in DEPARTMENT_RULES:
        if job.lower() in lowered:
            return department
    return None


def extract_jobs(cell: Tag) -> list[str]:
    """Job titles from the cell's tooltip list, else from its visible text."""
    jobs: list[str] = []
    tooltip = ""
    for node in cell.select("[tooltip]"):
        value = node.get("tooltip") or ""
        if value.strip():
            tooltip = value
            break

    if tooltip:
        fragment = BeautifulSoup(html.unescape(tooltip), "html.parser")
        for li in fragment.find_all("li"):
            text = collapse_whitespace(li.get_text())
            if text:
                jobs.append(text)

    if not jobs:
        text = collapse_whitespace(cell.get_text())
        if text and text != EMPTY_MARKER:
            jobs.append(text)
    return jobs


def _find_rows(soup: BeautifulSoup) -> list[Tag]:
    for selector in ROW_SELECTORS:
        rows = soup.select(selector)
        if rows:
            return rows
    return []


def _display_name(cell: Tag) -> str:
    link = cell.find("a")
    name = collapse_whitespace(link.get_text()) if link is not None else ""
    if not name:
        name = cell.get_text()
    return collapse_whitespace(name)


def parse_department_rows(value: str) -> list[DepartmentRow]:
    trimmed = (value or "").strip()
    if not trimmed:
        raise ReportParseError("hot schedules html is required")

    soup = BeautifulSoup(trimmed, "html.parser")
    rows = _find_rows(soup)
    if not rows:
        raise ReportParseError("could not find employee table rows")

    out: list[DepartmentRow] = []
    for row in rows:
        cells = row.find_all("td")
        if len(cells) < MIN_CELLS:
            continue

        names = split_display_name(_display_name(cells[NAME_CELL]))
        if names is None:
            continue
        first, last = names

        preferred = collapse_whitespace(cells[PREFERRED_CELL].get_text())
        if preferred == EMPTY_MARKER:
            preferred = ""

        department = map_department_from_jobs(" | ".join(extract_jobs(cells[JOBS_CELL])))
        if department is None:
            continue

        out.append(DepartmentRow(
            first_name=first,
            last_name=last,
            preferred_name=preferred,
            department=department,
        ))

    if not out:
        raise ReportParseError("no mappable employees found in html")
    return out
