"""Location and employee models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, field_validator

from totem.parsers.names import (
    canonical_time_punch_name,
    canonical_time_punch_name_from_value,
    normalize_name_key,
)


class Department(StrEnum):
    PARTNER = "PARTNER"
    EXECUTIVE = "EXECUTIVE"
    CENTRAL = "CENTRAL"
    DIRECTOR = "DIRECTOR"
    BOH = "BOH"
    FOH = "FOH"
    NONE = "NONE"


# Summary-only bucket for terminated and unmatched punch rows; never assigned.
TERMINATED_BUCKET = "TERMINATED"


class Location(BaseModel):
    """A restaurant location."""

    id: int = 0
    name: str
    number: str

    model_config = {"str_strip_whitespace": True}


class Employee(BaseModel):
    """An employee on a location's roster.

    ``termination_date`` is ``None`` while the employee is active. The
    ``time_punch_name`` keeps the raw roster spelling so that punch reports
    keep matching after a manual rename.
    """

    id: int = 0
    location_id: int
    first_name: str
    last_name: str
    time_punch_name: str = ""
    department: str = ""
    birthday: str = ""  # ISO YYYY-MM-DD, "" when unknown
    annual_salary: Optional[Decimal] = None
    termination_date: Optional[date] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("department")
    @classmethod
    def _known_department(cls, value: str) -> str:
        if value and value not in Department.__members__:
            raise ValueError(f"unknown department {value!r}")
        return value

    @property
    def is_terminated(self) -> bool:
        return self.termination_date is not None

    @property
    def is_salaried(self) -> bool:
        return self.annual_salary is not None and self.annual_salary > 0

    @property
    def time_punch_key(self) -> str:
        """Canonical ``last, first`` key used against punch and roster exports."""
        if self.time_punch_name:
            return canonical_time_punch_name_from_value(self.time_punch_name)
        return canonical_time_punch_name(self.first_name, self.last_name)

    @property
    def name_key(self) -> str:
        return normalize_name_key(self.first_name, self.last_name)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
