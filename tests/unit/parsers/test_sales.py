"""Tests for the sales raw text and manual form parsers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from totem.models.sales import SaleCategory
from totem.parsers.sales import (
    match_destination,
    parse_sales_text,
    sales_records_from_form,
    sales_records_from_text,
)

DAY = date(2024, 3, 1)

REPORT = """
Destination Summary
CARRY OUT 200 1,635.31 20.5%
DRIVE THRU 410 $4,210.00 52.1%
M-DRIVE-THRU 12 180.25 2.2%
DINE IN 95 1,010.10 12.5%
1 - Breakfast 80 900.00
2 - Lunch 150 2,100.50
Report Totals: 717 7,035.66
CARRY OUT 999 9,999.99
1 - Breakfast 5 42.00
3 - Brunch 4 11.00
x y
"""


class TestMatchDestination:
    def test_longest_prefix_wins(self):
        assert match_destination("M-DRIVE-THRU 12 180.25") == ("M-DRIVE-THRU", "Mobile Drive-Thru")

    def test_no_match(self):
        assert match_destination("TOTAL 1 2") is None


class TestParseSalesText:
    def test_destinations_before_totals_only(self):
        _, destinations = parse_sales_text(REPORT)
        assert destinations == {
            "Carry Out": Decimal("1635.31"),
            "Drive-Thru": Decimal("4210.00"),
            "Mobile Drive-Thru": Decimal("180.25"),
            "Dine-In": Decimal("1010.10"),
        }

    def test_day_parts_anywhere_and_accumulate(self):
        day_parts, _ = parse_sales_text(REPORT)
        assert day_parts == {"Breakfast": Decimal("942.00"), "Lunch": Decimal("2100.50")}

    def test_single_day_part_line(self):
        day_parts, _ = parse_sales_text("1 - Breakfast 5 42.00")
        assert day_parts == {"Breakfast": Decimal("42.00")}

    def test_blank_text(self):
        assert parse_sales_text("") == ({}, {})


class TestSalesRecords:
    def test_records_from_text(self):
        records = sales_records_from_text(7, DAY, "CARRY OUT 200 1,635.31\n1 - Lunch 3 42.00")
        assert {(r.category, r.item, r.amount) for r in records} == {
            (SaleCategory.DAY_PART, "Lunch", Decimal("42.00")),
            (SaleCategory.DESTINATION, "Carry Out", Decimal("1635.31")),
        }
        assert all(r.location_id == 7 and r.business_date == DAY for r in records)

    def test_records_from_form_skip_blank_and_junk(self):
        form = {
            "daypart|Lunch": "150.25",
            "daypart|Dinner": "",
            "destination|Drive-Thru": "abc",
            "destination|Carry Out": " 99 ",
            "destination|": "5",
            "notes": "12",
        }
        records = sales_records_from_form(1, DAY, form)
        assert [(r.category, r.item, r.amount) for r in records] == [
            (SaleCategory.DAY_PART, "Lunch", Decimal("150.25")),
            (SaleCategory.DESTINATION, "Carry Out", Decimal("99")),
        ]
