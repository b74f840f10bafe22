"""Destringing helpers: money, ``H:MM`` hours, form numbers and report dates.

Every helper degrades instead of raising: a malformed token becomes zero
(or ``None`` for dates) so one bad field never aborts a whole report.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

ZERO = Decimal("0")

TIME_TOKEN_RE = re.compile(r"(?<![\d:])\d+:\d{2}(?![\d:])")
MONEY_TOKEN_RE = re.compile(r"-?\$-?[\d,]*\.?\d+")

# Ordered; the first layout that parses wins.
DATE_LAYOUTS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%m-%d-%y",
)
TIMESTAMP_LAYOUT = "%Y-%m-%d %H:%M:%S"


def parse_money(value: str) -> Decimal:
    """``"$6,328.40"`` -> ``Decimal("6328.40")``; anything unparseable -> 0."""
    cleaned = (value or "").strip().replace("$", "").replace(",", "")
    if not cleaned:
        return ZERO
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return ZERO
    return amount if amount.is_finite() else ZERO


def parse_hours(value: str) -> Decimal:
    """``"427:34"`` -> 427 + 34/60 hours; anything not ``H:MM`` -> 0."""
    parts = (value or "").strip().split(":")
    if len(parts) != 2:
        return ZERO
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return ZERO
    return Decimal(hours) + Decimal(minutes) / Decimal(60)


def parse_decimal(value: str) -> Decimal:
    """Plain numeric form field. Currency symbols, separators and junk -> 0."""
    try:
        amount = Decimal((value or "").strip())
    except InvalidOperation:
        return ZERO
    return amount if amount.is_finite() else ZERO


def parse_report_date(value: str) -> Optional[date]:
    value = (value or "").strip()
    if not value:
        return None
    for layout in DATE_LAYOUTS:
        try:
            return datetime.strptime(value, layout).date()
        except ValueError:
            continue
    try:
        return datetime.strptime(value, TIMESTAMP_LAYOUT).date()
    except ValueError:
        return None


def normalize_birthday(value: str) -> Optional[str]:
    """Normalize a spreadsheet birthday to ISO ``YYYY-MM-DD``; ``None`` if unparseable."""
    parsed = parse_report_date(value)
    return parsed.isoformat() if parsed is not None else None


def time_tokens(line: str) -> list[str]:
    return TIME_TOKEN_RE.findall(line)


def money_tokens(line: str) -> list[str]:
    return MONEY_TOKEN_RE.findall(line)
