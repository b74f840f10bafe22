"""Transient rows produced by the roster, birthdate and HotSchedules parsers."""

from __future__ import annotations

from pydantic import BaseModel


class BioEmployeeRow(BaseModel):
    first_name: str
    last_name: str
    time_punch_name: str  # canonical "last, first"
    terminated: bool = False


class BirthdateRow(BaseModel):
    time_punch_name: str
    birthday: str  # ISO YYYY-MM-DD


class DepartmentRow(BaseModel):
    first_name: str
    last_name: str
    preferred_name: str = ""
    department: str
