"""Tests for the labor raw text and manual form parsers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from totem.parsers.labor import parse_labor_form, parse_labor_text

DAY = date(2024, 3, 1)

REPORT = """
Labor Summary
All Employees Grand Total 427:37 427:34 $6,328.40 0:03 $1.10 $6,329.50
All Employees Grand Total 1:00 1:00 $1.00 0:00 $0.00 $1.00
"""


class TestParseLaborText:
    def test_first_grand_total_line(self):
        rec = parse_labor_text(3, DAY, REPORT)
        assert rec.location_id == 3
        assert rec.business_date == DAY
        assert round(rec.regular_hours, 4) == Decimal("427.5667")
        assert rec.regular_wages == Decimal("6328.40")
        assert rec.overtime_hours == Decimal("0.05")
        assert rec.overtime_wages == Decimal("1.10")

    def test_no_grand_total_is_zero(self):
        rec = parse_labor_text(3, DAY, "nothing useful")
        assert rec.total_hours == Decimal(0)
        assert rec.total_wages == Decimal(0)

    def test_short_grand_total_line_is_zero(self):
        rec = parse_labor_text(3, DAY, "All Employees Grand Total 1:00 1:00\n" + REPORT)
        assert rec.total_hours == Decimal(0)


class TestParseLaborForm:
    def test_values(self):
        rec = parse_labor_form(3, DAY, {
            "regular": "40.5",
            "overtime": "2",
            "regular_wages": "607.50",
            "overtime_wages": "45",
        })
        assert rec.total_hours == Decimal("42.5")
        assert rec.total_wages == Decimal("652.50")

    def test_bad_values_are_zero(self):
        rec = parse_labor_form(3, DAY, {"regular": "lots", "overtime_wages": ""})
        assert rec.regular_hours == Decimal(0)
        assert rec.overtime_wages == Decimal(0)

    def test_formatted_numbers_are_zero(self):
        rec = parse_labor_form(3, DAY, {"regular_wages": "$1,000", "overtime_wages": "1,000", "regular": "12"})
        assert rec.regular_wages == Decimal(0)
        assert rec.overtime_wages == Decimal(0)
        assert rec.regular_hours == Decimal(12)
