"""Employee bio roster and birthdate spreadsheet parsers."""

from __future__ import annotations

from totem.core.exceptions import MissingColumnError
from totem.models.imports import BioEmployeeRow, BirthdateRow
from totem.parsers.destring import normalize_birthday
from totem.parsers.names import split_time_punch_name
from totem.parsers.spreadsheet import cell_value, header_index, read_spreadsheet_rows

NAME_COLUMN = "employee name"
STATUS_COLUMN = "employee status"
TERMINATION_DATE_COLUMN = "termination date"
BIRTHDATE_COLUMNS: tuple[str, ...] = ("birth date", "birthdate", "birthday")

TERMINATED_STATUS_MARKERS: tuple[str, ...] = ("terminat", "inactive")


def is_terminated(status: str, termination_date: str) -> bool:
    if termination_date.strip():
        return True
    status = status.strip().lower()
    return any(marker in status for marker in TERMINATED_STATUS_MARKERS)


def parse_bio_employees(data: bytes, filename: str) -> list[BioEmployeeRow]:
    rows = read_spreadsheet_rows(data, filename)
    columns = header_index(rows[0])

    if NAME_COLUMN not in columns:
        raise MissingColumnError(NAME_COLUMN)
    name_idx = columns[NAME_COLUMN]
    status_idx = columns.get(STATUS_COLUMN, -1)
    term_idx = columns.get(TERMINATION_DATE_COLUMN, -1)

    employees: list[BioEmployeeRow] = []
    for row in rows[1:]:
        parts = split_time_punch_name(cell_value(row, name_idx))
        if parts is None:
            continue
        first, last, time_punch = parts
        employees.append(BioEmployeeRow(
            first_name=first,
            last_name=last,
            time_punch_name=time_punch,
            terminated=is_terminated(cell_value(row, status_idx), cell_value(row, term_idx)),
        ))
    return employees


def parse_birthdates(data: bytes, filename: str) -> list[BirthdateRow]:
    rows = read_spreadsheet_rows(data, filename)
    columns = header_index(rows[0])

    if NAME_COLUMN not in columns:
        raise MissingColumnError(NAME_COLUMN)
    name_idx = columns[NAME_COLUMN]
    birth_idx = next((columns[c] for c in BIRTHDATE_COLUMNS if c in columns), -1)
    if birth_idx == -1:
        raise MissingColumnError("birth date")

    out: list[BirthdateRow] = []
    for row in rows[1:]:
        parts = split_time_punch_name(cell_value(row, name_idx))
        if parts is None:
            continue
        birthday = normalize_birthday(cell_value(row, birth_idx))
        if birthday is None:
            continue
        out.append(BirthdateRow(time_punch_name=parts[2], birthday=birthday))
    return out
