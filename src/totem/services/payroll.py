"""Payroll events and fixed salary lines."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation

from totem.core.exceptions import InvalidInputError
from totem.core.logging import get_logger
from totem.models.payroll import PayrollEvent, PayrollEventType, Salary
from totem.models.summary import SalaryTotals
from totem.services.base import BaseService
from totem.services.summarizer import salary_totals

log = get_logger("totem.services.payroll")


def parse_amount(value: str, field: str = "amount") -> Decimal:
    cleaned = (value or "").strip().replace("$", "").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise InvalidInputError(f"invalid {field}: {value!r}") from None
    if not amount.is_finite():
        raise InvalidInputError(f"invalid {field}: {value!r}")
    return amount


class PayrollService(BaseService):
    def record_event(
        self,
        location_id: int,
        *,
        employee_id: int,
        event_date: str,
        event_type: str,
        description: str,
        amount: str,
    ) -> PayrollEvent:
        """Validate form input and book a payroll event against an employee."""
        if not employee_id:
            raise InvalidInputError("employee is required")
        description = (description or "").strip()
        if not description:
            raise InvalidInputError("description is required")
        try:
            when = date.fromisoformat((event_date or "").strip())
        except ValueError:
            raise InvalidInputError(f"invalid date: {event_date!r}") from None
        try:
            kind = PayrollEventType((event_type or "").strip())
        except ValueError:
            raise InvalidInputError(f"unknown event type: {event_type!r}") from None

        event = self._store.create_payroll_event(PayrollEvent(
            location_id=location_id,
            employee_id=employee_id,
            event_date=when,
            event_type=kind,
            description=description,
            amount=parse_amount(amount),
        ))
        log.info("payroll_event_recorded", location_id=location_id, event_id=event.id,
                 event_type=str(kind), amount=str(event.amount))
        return event

    def list_events(self, location_id: int, start: date, end: date) -> list[PayrollEvent]:
        return self._store.list_payroll_events(location_id, start, end)

    def delete_event(self, location_id: int, event_id: int) -> None:
        self._store.delete_payroll_event(location_id, event_id)

    def add_salary(self, location_id: int, name: str, annual_amount: str) -> Salary:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("salary name is required")
        amount = parse_amount(annual_amount, "annual amount")
        if amount < 0:
            raise InvalidInputError(f"invalid annual amount: {annual_amount!r}")
        return self._store.create_salary(location_id, name, amount)

    def list_salaries(self, location_id: int) -> tuple[list[Salary], SalaryTotals]:
        salaries = self._store.list_salaries(location_id)
        return salaries, salary_totals(salaries, self._settings.reports.days_per_year)

    def delete_salary(self, location_id: int, salary_id: int) -> None:
        self._store.delete_salary(location_id, salary_id)
