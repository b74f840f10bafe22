"""Derived summaries. Recomputed per request, never persisted."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class DepartmentTotals(BaseModel):
    department: str
    hours: Decimal = Decimal("0")
    wages: Decimal = Decimal("0")
    employee_count: int = 0


class EmployeeLaborTotals(BaseModel):
    name: str
    employee_id: Optional[int] = None
    department: str
    hours: Decimal = Decimal("0")
    wages: Decimal = Decimal("0")
    salaried: bool = False


class TimePunchSummary(BaseModel):
    """Department and employee rollup of a time-punch report."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    day_count: int = 0
    total_hours: Decimal = Decimal("0")
    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    regular_wages: Decimal = Decimal("0")
    overtime_wages: Decimal = Decimal("0")
    total_wages: Decimal = Decimal("0")
    salary_amount: Decimal = Decimal("0")
    payroll_event_amount: Decimal = Decimal("0")
    payroll_event_totals: dict[str, Decimal] = Field(default_factory=dict)
    total_sales: Decimal = Decimal("0")
    productivity: Decimal = Decimal("0")
    unmatched_count: int = 0
    departments: list[DepartmentTotals] = Field(default_factory=list)
    employees: list[EmployeeLaborTotals] = Field(default_factory=list)


class DailyPerformanceRecord(BaseModel):
    business_date: date
    sales: Decimal = Decimal("0")
    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    total_hours: Decimal = Decimal("0")
    regular_wages: Decimal = Decimal("0")
    overtime_wages: Decimal = Decimal("0")
    total_wages: Decimal = Decimal("0")
    productivity: Decimal = Decimal("0")  # sales per labor hour
    labor_percent: Decimal = Decimal("0")  # wages as a percent of sales


class PerformanceSummary(BaseModel):
    day_count: int = 0
    total_sales: Decimal = Decimal("0")
    total_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    total_wages: Decimal = Decimal("0")
    average_daily_sales: Decimal = Decimal("0")
    productivity: Decimal = Decimal("0")
    labor_percent: Decimal = Decimal("0")


class SalaryTotals(BaseModel):
    total_annual: Decimal = Decimal("0")
    total_daily: Decimal = Decimal("0")


class CommonRanges(BaseModel):
    """Quick-pick range starts offered next to date filters."""

    month_start: date
    ninety_start: date
    ytd_start: date
    today: date
