"""Payroll events and fixed salaries."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel

DAYS_PER_YEAR = 365


class PayrollEventType(StrEnum):
    BONUS = "Bonus"
    TIP_OUT = "Tip Out"
    REIMBURSEMENT = "Reimbursement"
    ADJUSTMENT = "Adjustment"
    ADVANCE = "Advance"
    OTHER = "Other"


class PayrollEvent(BaseModel):
    """A one-off payroll amount booked against an employee."""

    id: int = 0
    location_id: int
    employee_id: int
    event_date: date
    event_type: PayrollEventType
    description: str
    amount: Decimal = Decimal("0")


class Salary(BaseModel):
    """A fixed annual salary line for a location."""

    id: int = 0
    location_id: int
    name: str
    annual_amount: Decimal = Decimal("0")

    @property
    def daily_amount(self) -> Decimal:
        return self.annual_amount / DAYS_PER_YEAR
