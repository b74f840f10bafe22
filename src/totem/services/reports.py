"""Sales and labor report intake plus the summaries built on top of them."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

from totem.core.exceptions import InvalidInputError
from totem.core.logging import get_logger
from totem.models.labor import LaborRecord
from totem.models.sales import DailySalesSummary, SaleRecord, SalesRangeSummary
from totem.models.summary import DailyPerformanceRecord, PerformanceSummary, TimePunchSummary
from totem.parsers.labor import parse_labor_form, parse_labor_text
from totem.parsers.sales import sales_records_from_form, sales_records_from_text
from totem.parsers.time_punch import parse_time_punch_report
from totem.services.base import BaseService
from totem.services.summarizer import (
    apply_sales,
    build_performance_records,
    calculate_summary,
    daily_sales_totals,
    default_range,
    summarize_sales_by_day,
    summarize_sales_range,
    summarize_time_punch,
)

log = get_logger("totem.services.reports")


def parse_iso_date(value: str, field: str) -> date:
    try:
        return date.fromisoformat((value or "").strip())
    except ValueError:
        raise InvalidInputError(f"invalid {field} date: {value!r}") from None


class ReportService(BaseService):
    """Daily sales/labor intake and range reporting for a location."""

    def resolve_range(self, start: str = "", end: str = "", today: date | None = None) -> tuple[date, date]:
        """Parse ISO ``start``/``end``; a missing bound falls back to the default window."""
        today = today or date.today()
        days = self._settings.reports.default_range_days
        if not (start or "").strip() and not (end or "").strip():
            return default_range(today, days)
        end_date = parse_iso_date(end, "end") if (end or "").strip() else today
        if (start or "").strip():
            start_date = parse_iso_date(start, "start")
        else:
            start_date = default_range(end_date, days)[0]
        return start_date, end_date

    # ---- intake ----

    def save_sales(
        self,
        location_id: int,
        business_date: date | None,
        *,
        raw_text: str = "",
        form: Mapping[str, str] | None = None,
    ) -> list[SaleRecord]:
        """Upsert a day's sales from a pasted report, else from manual form fields."""
        if business_date is None:
            raise InvalidInputError("date is required")
        self._store.get_location(location_id)
        if (raw_text or "").strip():
            records = sales_records_from_text(location_id, business_date, raw_text)
        else:
            records = sales_records_from_form(location_id, business_date, form or {})
        self._store.save_sales_batch(location_id, business_date, records)
        log.info("sales_saved", location_id=location_id, business_date=business_date.isoformat(),
                 records=len(records))
        return records

    def save_labor(
        self,
        location_id: int,
        business_date: date | None,
        *,
        raw_text: str = "",
        form: Mapping[str, str] | None = None,
    ) -> LaborRecord:
        if business_date is None:
            raise InvalidInputError("date is required")
        if (raw_text or "").strip():
            record = parse_labor_text(location_id, business_date, raw_text)
        else:
            record = parse_labor_form(location_id, business_date, form or {})
        self._store.save_labor(record)
        log.info("labor_saved", location_id=location_id, business_date=business_date.isoformat(),
                 hours=str(record.total_hours), wages=str(record.total_wages))
        return record

    # ---- reporting ----

    def sales_history(
        self, location_id: int, start: date, end: date
    ) -> tuple[list[DailySalesSummary], SalesRangeSummary]:
        self._store.get_location(location_id)
        records = self._store.get_sales_in_range(location_id, start, end)
        return summarize_sales_by_day(records), summarize_sales_range(records)

    def sales_for_date(self, location_id: int, business_date: date) -> DailySalesSummary | None:
        self._store.get_location(location_id)
        days = summarize_sales_by_day(self._store.get_sales_by_date(location_id, business_date))
        return days[0] if days else None

    def performance(
        self, location_id: int, start: date, end: date
    ) -> tuple[list[DailyPerformanceRecord], PerformanceSummary]:
        self._store.get_location(location_id)
        records = build_performance_records(
            self._store.get_sales_in_range(location_id, start, end),
            self._store.get_labor_in_range(location_id, start, end),
        )
        return records, calculate_summary(records)

    def time_punch_summary(
        self, location_id: int, text: str, *, start: date | None = None, end: date | None = None
    ) -> TimePunchSummary:
        """Parse a time-punch export and roll it up against the location's roster."""
        self._store.get_location(location_id)
        report = parse_time_punch_report(text)
        start = start or report.start_date
        end = end or report.end_date

        employees = self._store.list_employees(location_id)
        events = []
        if start is not None and end is not None:
            events = self._store.list_payroll_events(location_id, start, end)

        summary = summarize_time_punch(
            report, employees, events,
            start=start, end=end, days_per_year=self._settings.reports.days_per_year,
        )
        if start is not None and end is not None:
            sales = daily_sales_totals(self._store.get_sales_in_range(location_id, start, end))
            summary = apply_sales(summary, sum(sales.values(), summary.total_sales))

        log.info(
            "time_punch_summarized",
            location_id=location_id,
            employees=len(report.employees),
            unmatched=summary.unmatched_count,
            day_count=summary.day_count,
        )
        return summary
