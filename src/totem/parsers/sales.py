"""Point-of-sale raw text report and manual sales form parsers."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation

from totem.models.sales import DAY_PARTS, SaleCategory, SaleRecord
from totem.parsers.destring import parse_money

REPORT_TOTALS_MARKER = "Report Totals:"

# Ordered (report prefix, destination) pairs; the longest matching prefix wins.
DESTINATION_PREFIXES: tuple[tuple[str, str], ...] = (
    ("CARRY OUT", "Carry Out"),
    ("DELIVERY", "Catering Delivery"),
    ("PICKUP", "Catering Pickup"),
    ("DINE IN", "Dine-In"),
    ("DRIVE THRU", "Drive-Thru"),
    ("M-CARRYOUT", "Mobile Carryout"),
    ("M-DINEIN", "Mobile Dine-In"),
    ("M-DRIVE-THRU", "Mobile Drive-Thru"),
    ("ON DEMAND", "Third-Party Delivery"),
)

FORM_PREFIXES: tuple[tuple[str, SaleCategory], ...] = (
    ("daypart|", SaleCategory.DAY_PART),
    ("destination|", SaleCategory.DESTINATION),
)


def match_destination(line: str) -> tuple[str, str] | None:
    """Return the longest (prefix, destination) pair the line starts with."""
    best: tuple[str, str] | None = None
    for prefix, destination in DESTINATION_PREFIXES:
        if line.startswith(prefix) and (best is None or len(prefix) > len(best[0])):
            best = (prefix, destination)
    return best


def _day_part_amount(parts: list[str]) -> tuple[str, Decimal] | None:
    # "<n> - <day part> <count> <amount> ..."
    if len(parts) >= 5 and parts[1] == "-" and parts[2] in DAY_PARTS:
        return parts[2], parse_money(parts[4])
    return None


def parse_sales_text(text: str) -> tuple[dict[str, Decimal], dict[str, Decimal]]:
    """Return ``(day part totals, destination totals)`` extracted from a raw report."""
    day_parts: dict[str, Decimal] = {}
    destinations: dict[str, Decimal] = {}
    seen_report_totals = False

    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith(REPORT_TOTALS_MARKER):
            seen_report_totals = True
            continue

        parts = line.split()
        if len(parts) < 3:
            continue

        day_part = _day_part_amount(parts)
        if day_part is not None:
            name, amount = day_part
            day_parts[name] = day_parts.get(name, Decimal("0")) + amount

        if seen_report_totals:
            continue
        matched = match_destination(line)
        if matched is None:
            continue
        prefix, destination = matched
        # Prefix tokens, then the count, then the sales amount.
        sales_idx = len(prefix.split()) + 1
        if len(parts) > sales_idx:
            destinations[destination] = (
                destinations.get(destination, Decimal("0")) + parse_money(parts[sales_idx])
            )

    return day_parts, destinations


def sales_records_from_text(location_id: int, business_date: date, text: str) -> list[SaleRecord]:
    day_parts, destinations = parse_sales_text(text)
    records = [
        SaleRecord(location_id=location_id, business_date=business_date,
                   category=SaleCategory.DAY_PART, item=item, amount=amount)
        for item, amount in day_parts.items()
    ]
    records.extend(
        SaleRecord(location_id=location_id, business_date=business_date,
                   category=SaleCategory.DESTINATION, item=item, amount=amount)
        for item, amount in destinations.items()
    )
    return records


def sales_records_from_form(
    location_id: int, business_date: date, form: Mapping[str, str]
) -> list[SaleRecord]:
    """Manual entry: ``daypart|<item>`` / ``destination|<item>`` fields; blanks and junk are skipped."""
    records: list[SaleRecord] = []
    for key, value in form.items():
        for prefix, category in FORM_PREFIXES:
            if not key.startswith(prefix):
                continue
            item = key[len(prefix):]
            if not item or "|" in item or not (value or "").strip():
                break
            try:
                amount = Decimal(value.strip())
            except InvalidOperation:
                break
            if not amount.is_finite():
                break
            records.append(SaleRecord(
                location_id=location_id, business_date=business_date,
                category=category, item=item, amount=amount,
            ))
            break
    return records
