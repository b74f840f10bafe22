"""Tests for PayrollService events and salaries."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from totem.core.exceptions import EmployeeNotFoundError, InvalidInputError, NotFoundError
from totem.models.payroll import PayrollEventType
from totem.services.payroll import PayrollService

DAY = date(2024, 3, 1)


@pytest.fixture
def service(settings, store):
    return PayrollService(settings=settings, store=store)


@pytest.fixture
def employee(store, location):
    return store.create_employee(location.id, "John", "Smith")


def _event_form(employee_id: int, **overrides) -> dict:
    form = {
        "employee_id": employee_id,
        "event_date": "2024-03-01",
        "event_type": "Tip Out",
        "description": "Friday tips",
        "amount": "$1,020.50",
    }
    form.update(overrides)
    return form


class TestPayrollEvents:
    def test_record_and_list(self, service, location, employee):
        event = service.record_event(location.id, **_event_form(employee.id))
        assert event.event_type == PayrollEventType.TIP_OUT
        assert event.amount == Decimal("1020.50")
        assert [e.id for e in service.list_events(location.id, DAY, DAY)] == [event.id]

        service.delete_event(location.id, event.id)
        assert service.list_events(location.id, DAY, DAY) == []

    @pytest.mark.parametrize("field,value", [
        ("employee_id", 0),
        ("event_date", "03/01/2024"),
        ("event_type", "Raise"),
        ("description", "  "),
        ("amount", "ten"),
    ])
    def test_rejects_bad_input(self, service, location, employee, field, value):
        form = _event_form(employee.id)
        form[field] = value
        with pytest.raises(InvalidInputError):
            service.record_event(location.id, **form)

    def test_unknown_employee(self, service, location):
        with pytest.raises(EmployeeNotFoundError):
            service.record_event(location.id, **_event_form(999))


class TestSalaries:
    def test_add_list_delete(self, service, location):
        salary = service.add_salary(location.id, "General Manager", "36,500")
        salaries, totals = service.list_salaries(location.id)
        assert [s.id for s in salaries] == [salary.id]
        assert totals.total_daily == Decimal("100.00")

        service.delete_salary(location.id, salary.id)
        with pytest.raises(NotFoundError):
            service.delete_salary(location.id, salary.id)

    @pytest.mark.parametrize("name,amount", [("", "100"), ("GM", "abc"), ("GM", "-1")])
    def test_rejects_bad_input(self, service, location, name, amount):
        with pytest.raises(InvalidInputError):
            service.add_salary(location.id, name, amount)
