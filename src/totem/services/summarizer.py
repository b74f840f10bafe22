"""Labor, sales and salary rollups. Every function here is pure."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from totem.core.types import TimePunchKey
from totem.models.employee import TERMINATED_BUCKET, Department, Employee
from totem.models.labor import LaborRecord, TimePunchReport
from totem.models.payroll import DAYS_PER_YEAR, PayrollEvent, Salary
from totem.models.sales import (
    DAY_PARTS,
    DESTINATIONS,
    DailySalesSummary,
    ItemShare,
    SaleCategory,
    SaleRecord,
    SalesRangeSummary,
)
from totem.models.summary import (
    CommonRanges,
    DailyPerformanceRecord,
    DepartmentTotals,
    EmployeeLaborTotals,
    PerformanceSummary,
    SalaryTotals,
    TimePunchSummary,
)
from totem.parsers.names import canonical_time_punch_name_from_value

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")

# Department rollups are listed in this order, terminated/unmatched last.
BUCKET_ORDER: tuple[str, ...] = tuple(d.value for d in Department) + (TERMINATED_BUCKET,)


def money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def ratio(numerator: Decimal, denominator: Decimal, scale: Decimal = Decimal("1")) -> Decimal:
    """``numerator / denominator * scale`` rounded to cents; 0 when the denominator is 0."""
    if not denominator:
        return ZERO
    return money(numerator / denominator * scale)


def day_count(start: Optional[date], end: Optional[date]) -> int:
    """Inclusive number of days in ``[start, end]``; 0 when unset or reversed."""
    if start is None or end is None or end < start:
        return 0
    return (end - start).days + 1


def _bucket_rank(bucket: str) -> int:
    return BUCKET_ORDER.index(bucket) if bucket in BUCKET_ORDER else len(BUCKET_ORDER)


def _roster_index(employees: Iterable[Employee]) -> dict[TimePunchKey, Employee]:
    # An active employee wins over a terminated one sharing the same key.
    index: dict[TimePunchKey, Employee] = {}
    for emp in employees:
        key = emp.time_punch_key
        if not key:
            continue
        current = index.get(key)
        if current is None or (current.is_terminated and not emp.is_terminated):
            index[key] = emp
    return index


def summarize_time_punch(
    report: TimePunchReport,
    employees: list[Employee],
    events: list[PayrollEvent],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    days_per_year: int = DAYS_PER_YEAR,
) -> TimePunchSummary:
    """Roll a parsed time-punch report up by department and employee.

    The range defaults to the report's own dates. Salaried employees with no
    punch rows are prorated over the range; payroll events inside it are
    totalled by type.
    """
    start = start or report.start_date
    end = end or report.end_date
    days = day_count(start, end)
    index = _roster_index(employees)

    departments: dict[str, DepartmentTotals] = {}
    rows: list[EmployeeLaborTotals] = []
    matched: set[int] = set()
    unmatched = 0

    def bucket(name: str) -> DepartmentTotals:
        if name not in departments:
            departments[name] = DepartmentTotals(department=name)
        return departments[name]

    for punch in report.employees:
        emp = index.get(canonical_time_punch_name_from_value(punch.name))
        if emp is None:
            unmatched += 1
            department = TERMINATED_BUCKET
        elif emp.is_terminated:
            department = TERMINATED_BUCKET
        else:
            department = emp.department or Department.NONE.value

        totals = bucket(department)
        totals.hours += punch.hours
        totals.wages += punch.wages
        totals.employee_count += 1

        if emp is not None:
            matched.add(emp.id)
        rows.append(EmployeeLaborTotals(
            name=emp.display_name if emp is not None else punch.name,
            employee_id=emp.id if emp is not None else None,
            department=department,
            hours=punch.hours,
            wages=punch.wages,
        ))

    salary_amount = ZERO
    if days:
        for emp in employees:
            if emp.is_terminated or not emp.is_salaried or emp.id in matched:
                continue
            amount = money(emp.annual_salary / days_per_year * days)
            department = emp.department or Department.NONE.value
            totals = bucket(department)
            totals.wages += amount
            totals.employee_count += 1
            rows.append(EmployeeLaborTotals(
                name=emp.display_name,
                employee_id=emp.id,
                department=department,
                wages=amount,
                salaried=True,
            ))
            salary_amount += amount

    event_totals: dict[str, Decimal] = {}
    event_amount = ZERO
    for event in events:
        if start is not None and event.event_date < start:
            continue
        if end is not None and event.event_date > end:
            continue
        key = str(event.event_type)
        event_totals[key] = event_totals.get(key, ZERO) + event.amount
        event_amount += event.amount

    if report.has_grand_total:
        total_hours = report.total_hours
        regular_hours, overtime_hours = report.regular_hours, report.overtime_hours
        regular_wages, overtime_wages = report.regular_wages, report.overtime_wages
        punch_wages = report.total_wages
    else:
        total_hours = sum((p.hours for p in report.employees), ZERO)
        regular_hours, overtime_hours = total_hours, ZERO
        punch_wages = sum((p.wages for p in report.employees), ZERO)
        regular_wages, overtime_wages = punch_wages, ZERO

    rows.sort(key=lambda r: (_bucket_rank(r.department), r.name.lower()))
    return TimePunchSummary(
        start_date=start,
        end_date=end,
        day_count=days,
        total_hours=total_hours,
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        regular_wages=regular_wages,
        overtime_wages=overtime_wages,
        total_wages=punch_wages + salary_amount,
        salary_amount=salary_amount,
        payroll_event_amount=event_amount,
        payroll_event_totals=event_totals,
        unmatched_count=unmatched,
        departments=sorted(departments.values(), key=lambda d: _bucket_rank(d.department)),
        employees=rows,
    )


def apply_sales(summary: TimePunchSummary, total_sales: Decimal) -> TimePunchSummary:
    """Attach sales for the summary's range and derive sales per labor hour."""
    return summary.model_copy(update={
        "total_sales": total_sales,
        "productivity": ratio(total_sales, summary.total_hours),
    })


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------

def _group_sales(records: Iterable[SaleRecord]) -> dict[date, dict[SaleCategory, dict[str, Decimal]]]:
    grouped: dict[date, dict[SaleCategory, dict[str, Decimal]]] = defaultdict(
        lambda: {SaleCategory.DAY_PART: {}, SaleCategory.DESTINATION: {}}
    )
    for rec in records:
        items = grouped[rec.business_date][rec.category]
        items[rec.item] = items.get(rec.item, ZERO) + rec.amount
    return grouped


def _zero_filled(known: tuple[str, ...], items: dict[str, Decimal]) -> dict[str, Decimal]:
    filled = {name: items.get(name, ZERO) for name in known}
    for name, amount in items.items():
        filled.setdefault(name, amount)
    return filled


def _shares(items: dict[str, Decimal], total: Decimal) -> list[ItemShare]:
    return [
        ItemShare(item=name, amount=amount, percent=ratio(amount, total, HUNDRED))
        for name, amount in items.items()
    ]


def daily_sales_totals(records: Iterable[SaleRecord]) -> dict[date, Decimal]:
    """Per-date sales: the day-part total, or the destination total when no day parts exist."""
    out: dict[date, Decimal] = {}
    for day, categories in _group_sales(records).items():
        day_parts = categories[SaleCategory.DAY_PART]
        if day_parts:
            out[day] = sum(day_parts.values(), ZERO)
        else:
            out[day] = sum(categories[SaleCategory.DESTINATION].values(), ZERO)
    return out


def summarize_sales_by_day(records: Iterable[SaleRecord]) -> list[DailySalesSummary]:
    """Per-day day-part and destination breakdowns, newest first."""
    out: list[DailySalesSummary] = []
    for day, categories in sorted(_group_sales(records).items(), reverse=True):
        day_parts = _zero_filled(DAY_PARTS, categories[SaleCategory.DAY_PART])
        destinations = _zero_filled(DESTINATIONS, categories[SaleCategory.DESTINATION])
        day_part_total = sum(day_parts.values(), ZERO)
        destination_total = sum(destinations.values(), ZERO)
        out.append(DailySalesSummary(
            business_date=day,
            day_part_total=day_part_total,
            destination_total=destination_total,
            day_parts=_shares(day_parts, day_part_total),
            destinations=_shares(destinations, destination_total),
        ))
    return out


def summarize_sales_range(records: Iterable[SaleRecord]) -> SalesRangeSummary:
    """Totals, daily averages and shares per item; averages count only days with data."""
    grouped = _group_sales(records)
    days = len(grouped)

    day_part_items: dict[str, Decimal] = {}
    destination_items: dict[str, Decimal] = {}
    for categories in grouped.values():
        for name, amount in categories[SaleCategory.DAY_PART].items():
            day_part_items[name] = day_part_items.get(name, ZERO) + amount
        for name, amount in categories[SaleCategory.DESTINATION].items():
            destination_items[name] = destination_items.get(name, ZERO) + amount

    day_parts = _zero_filled(DAY_PARTS, day_part_items)
    destinations = _zero_filled(DESTINATIONS, destination_items)
    day_part_total = sum(day_parts.values(), ZERO)
    destination_total = sum(destinations.values(), ZERO)
    day_divisor = Decimal(days)

    return SalesRangeSummary(
        day_count=days,
        day_part_total=day_part_total,
        destination_total=destination_total,
        day_part_totals=day_parts,
        day_part_averages={k: ratio(v, day_divisor) for k, v in day_parts.items()},
        day_part_percents={k: ratio(v, day_part_total, HUNDRED) for k, v in day_parts.items()},
        destination_totals=destinations,
        destination_averages={k: ratio(v, day_divisor) for k, v in destinations.items()},
        destination_percents={k: ratio(v, destination_total, HUNDRED) for k, v in destinations.items()},
    )


# ---------------------------------------------------------------------------
# Daily performance
# ---------------------------------------------------------------------------

def build_performance_records(
    sales: Iterable[SaleRecord], labor: Iterable[LaborRecord]
) -> list[DailyPerformanceRecord]:
    """One record per date that has sales or labor, oldest first."""
    sales_by_day = daily_sales_totals(sales)
    labor_by_day = {rec.business_date: rec for rec in labor if rec.business_date is not None}

    records: list[DailyPerformanceRecord] = []
    for day in sorted(set(sales_by_day) | set(labor_by_day)):
        amount = sales_by_day.get(day, ZERO)
        rec = labor_by_day.get(day) or LaborRecord(business_date=day)
        records.append(DailyPerformanceRecord(
            business_date=day,
            sales=amount,
            regular_hours=rec.regular_hours,
            overtime_hours=rec.overtime_hours,
            total_hours=rec.total_hours,
            regular_wages=rec.regular_wages,
            overtime_wages=rec.overtime_wages,
            total_wages=rec.total_wages,
            productivity=ratio(amount, rec.total_hours),
            labor_percent=ratio(rec.total_wages, amount, HUNDRED),
        ))
    return records


def calculate_summary(records: list[DailyPerformanceRecord]) -> PerformanceSummary:
    total_sales = sum((r.sales for r in records), ZERO)
    total_hours = sum((r.total_hours for r in records), ZERO)
    total_wages = sum((r.total_wages for r in records), ZERO)
    return PerformanceSummary(
        day_count=len(records),
        total_sales=total_sales,
        total_hours=total_hours,
        overtime_hours=sum((r.overtime_hours for r in records), ZERO),
        total_wages=total_wages,
        average_daily_sales=ratio(total_sales, Decimal(len(records))),
        productivity=ratio(total_sales, total_hours),
        labor_percent=ratio(total_wages, total_sales, HUNDRED),
    )


# ---------------------------------------------------------------------------
# Salaries and ranges
# ---------------------------------------------------------------------------

def salary_totals(salaries: Iterable[Salary], days_per_year: int = DAYS_PER_YEAR) -> SalaryTotals:
    total_annual = sum((s.annual_amount for s in salaries), ZERO)
    return SalaryTotals(total_annual=total_annual, total_daily=money(total_annual / days_per_year))


def common_ranges(today: date) -> CommonRanges:
    return CommonRanges(
        month_start=today.replace(day=1),
        ninety_start=today - timedelta(days=90),
        ytd_start=date(today.year, 1, 1),
        today=today,
    )


def default_range(today: date, days: int = 90) -> tuple[date, date]:
    """``(today - days, today)``, used when a request gives no range."""
    return today - timedelta(days=days), today
