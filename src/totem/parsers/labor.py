"""Labor report raw text and manual labor form parsers."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

from totem.models.labor import LaborRecord
from totem.parsers.destring import parse_decimal, parse_hours, parse_money

GRAND_TOTAL_PREFIX = "All Employees Grand Total"

# Token positions on the grand total line:
# All Employees Grand Total <total> <regular> <regular $> <overtime> <overtime $> <total $>
REGULAR_HOURS_IDX = 5
REGULAR_WAGES_IDX = 6
OVERTIME_HOURS_IDX = 7
OVERTIME_WAGES_IDX = 8
MIN_FIELDS = 9


def parse_labor_text(location_id: int, business_date: date | None, text: str) -> LaborRecord:
    """Read regular/overtime hours and wages from the first grand total line; zeros if absent."""
    record = LaborRecord(location_id=location_id, business_date=business_date)
    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line.startswith(GRAND_TOTAL_PREFIX):
            continue
        parts = line.split()
        if len(parts) >= MIN_FIELDS:
            record.regular_hours = parse_hours(parts[REGULAR_HOURS_IDX])
            record.regular_wages = parse_money(parts[REGULAR_WAGES_IDX])
            record.overtime_hours = parse_hours(parts[OVERTIME_HOURS_IDX])
            record.overtime_wages = parse_money(parts[OVERTIME_WAGES_IDX])
        break
    return record


def parse_labor_form(location_id: int, business_date: date | None, form: Mapping[str, str]) -> LaborRecord:
    return LaborRecord(
        location_id=location_id,
        business_date=business_date,
        regular_hours=parse_decimal(form.get("regular", "")),
        overtime_hours=parse_decimal(form.get("overtime", "")),
        regular_wages=parse_decimal(form.get("regular_wages", "")),
        overtime_wages=parse_decimal(form.get("overtime_wages", "")),
    )
