"""Time-punch (time clock) text report parser."""

from __future__ import annotations

import re
from decimal import Decimal

from totem.core.exceptions import ReportParseError
from totem.models.labor import TimePunchEmployeeTotals, TimePunchReport
from totem.parsers.destring import (
    ZERO,
    money_tokens,
    parse_hours,
    parse_money,
    parse_report_date,
    time_tokens,
)
from totem.parsers.names import collapse_whitespace

GRAND_TOTAL_PREFIX = "All Employees Grand Total"
EMPLOYEE_TOTALS_PREFIX = "Employee Totals"
DATE_RANGE_RE = re.compile(r"\bfrom\s+(\S+)\s+through\s+(\S+)", re.IGNORECASE)

# Punch detail lines start with a weekday and a date, or with a "* " marker.
# "Sun, Wei" is a name: the weekday must be followed by a digit.
NON_NAME_LINE_RE = re.compile(r"^(?:(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)\b,?\s*\d|\* )")


def _positional(tokens: list[str], idx: int, parse) -> Decimal:
    return parse(tokens[idx]) if idx < len(tokens) else ZERO


def _is_name_line(line: str) -> bool:
    if "," not in line or NON_NAME_LINE_RE.match(line):
        return False
    return not line.startswith(GRAND_TOTAL_PREFIX) and not DATE_RANGE_RE.search(line)


def parse_time_punch_report(text: str) -> TimePunchReport:
    report = TimePunchReport()
    totals: dict[str, TimePunchEmployeeTotals] = {}
    pending_name = ""

    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            continue

        if line.startswith(GRAND_TOTAL_PREFIX):
            times, money = time_tokens(line), money_tokens(line)
            report.total_hours = _positional(times, 0, parse_hours)
            report.regular_hours = _positional(times, 1, parse_hours)
            report.overtime_hours = _positional(times, 2, parse_hours)
            report.regular_wages = _positional(money, 0, parse_money)
            report.overtime_wages = _positional(money, 1, parse_money)
            report.total_wages = _positional(money, 2, parse_money)
            report.has_grand_total = True
            continue

        match = DATE_RANGE_RE.search(line)
        if match:
            report.start_date = parse_report_date(match.group(1))
            report.end_date = parse_report_date(match.group(2))
            continue

        if line.startswith(EMPLOYEE_TOTALS_PREFIX):
            if not pending_name:
                continue
            times, money = time_tokens(line), money_tokens(line)
            hours = parse_hours(times[0]) if times else ZERO
            wages = parse_money(money[-1]) if money else ZERO
            entry = totals.setdefault(pending_name, TimePunchEmployeeTotals(name=pending_name))
            entry.hours += hours
            entry.wages += wages
            pending_name = ""
            continue

        if _is_name_line(line):
            pending_name = collapse_whitespace(line)

    if not totals:
        raise ReportParseError("no employee totals found in time punch report")
    report.employees = list(totals.values())
    return report
