"""Labor records and parsed time-punch report structures."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class LaborRecord(BaseModel):
    """Daily labor totals for a location (one per date)."""

    location_id: int = 0
    business_date: Optional[date] = None
    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    regular_wages: Decimal = Decimal("0")
    overtime_wages: Decimal = Decimal("0")

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours

    @property
    def total_wages(self) -> Decimal:
        return self.regular_wages + self.overtime_wages


class TimePunchEmployeeTotals(BaseModel):
    """Hours and wages for one employee, keyed by the raw report name."""

    name: str
    hours: Decimal = Decimal("0")
    wages: Decimal = Decimal("0")


class TimePunchReport(BaseModel):
    """Everything extracted from a time-punch text export."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_hours: Decimal = Decimal("0")
    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    regular_wages: Decimal = Decimal("0")
    overtime_wages: Decimal = Decimal("0")
    total_wages: Decimal = Decimal("0")
    has_grand_total: bool = False
    employees: list[TimePunchEmployeeTotals] = Field(default_factory=list)
