"""Sales records and their day-part / destination rollups."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class SaleCategory(StrEnum):
    DAY_PART = "DayPart"
    DESTINATION = "Destination"


DAY_PARTS: tuple[str, ...] = ("Breakfast", "Lunch", "Afternoon", "Dinner", "Evening")

DESTINATIONS: tuple[str, ...] = (
    "Carry Out",
    "Catering Delivery",
    "Catering Pickup",
    "Dine-In",
    "Drive-Thru",
    "Mobile Carryout",
    "Mobile Dine-In",
    "Mobile Drive-Thru",
    "Third-Party Delivery",
)


class SaleRecord(BaseModel):
    """One sales bucket for a location and day. Upserted by (date, category, item)."""

    location_id: int
    business_date: date
    category: SaleCategory
    item: str
    amount: Decimal = Decimal("0")


class ItemShare(BaseModel):
    item: str
    amount: Decimal = Decimal("0")
    percent: Decimal = Decimal("0")


class DailySalesSummary(BaseModel):
    business_date: date
    day_part_total: Decimal = Decimal("0")
    destination_total: Decimal = Decimal("0")
    day_parts: list[ItemShare] = Field(default_factory=list)
    destinations: list[ItemShare] = Field(default_factory=list)


class SalesRangeSummary(BaseModel):
    """Per-item totals, daily averages and shares over a date range."""

    day_count: int = 0
    day_part_total: Decimal = Decimal("0")
    destination_total: Decimal = Decimal("0")
    day_part_totals: dict[str, Decimal] = Field(default_factory=dict)
    day_part_averages: dict[str, Decimal] = Field(default_factory=dict)
    day_part_percents: dict[str, Decimal] = Field(default_factory=dict)
    destination_totals: dict[str, Decimal] = Field(default_factory=dict)
    destination_averages: dict[str, Decimal] = Field(default_factory=dict)
    destination_percents: dict[str, Decimal] = Field(default_factory=dict)
