"""Tests for EmployeeService imports and manual edits."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from totem.core.exceptions import EmployeeNotFoundError, InvalidInputError, ReportParseError
from totem.services.employees import EmployeeService

RUN_DATE = date(2024, 3, 15)

STAFF_HTML = """
<table id="stafftable"><tbody>
<tr><td></td><td><a>John Smith</a></td><td>-</td><td></td><td></td><td></td><td>BOH General</td></tr>
<tr><td></td><td><a>Ann Lee</a></td><td>-</td><td></td><td></td><td></td><td>Dishwasher</td></tr>
</tbody></table>
"""


@pytest.fixture
def service(settings, store):
    return EmployeeService(settings=settings, store=store)


class TestImportBio:
    def test_creates_and_terminates(self, service, store, location, make_xlsx):
        leaving = store.create_employee(location.id, "Ann", "Lee", "Lee, Ann")
        data = make_xlsx([
            ["Employee Name", "Employee Status"],
            ["Smith, John", "Active"],
            ["Doe, Jane", "Terminated"],
        ])
        result = service.import_bio(location.id, data, "bio.xlsx", run_date=RUN_DATE)

        assert (result.created, result.terminated) == (1, 1)
        active = service.list_employees(location.id, active_only=True)
        assert [(e.first_name, e.last_name, e.time_punch_name) for e in active] == [
            ("John", "Smith", "smith, john"),
        ]
        assert store.get_employee(location.id, leaving.id).termination_date == RUN_DATE

    def test_reinstates_returning_employee(self, service, store, location, make_xlsx):
        emp = store.create_employee(location.id, "John", "Smith", "Smith, John")
        store.terminate_employee(location.id, emp.id, date(2024, 1, 1))

        result = service.import_bio(location.id, make_xlsx([["Employee Name"], ["John Smith"]]), "bio.xlsx")

        assert result.reinstated == 1
        assert result.created == 0
        assert len(store.list_employees(location.id)) == 1

    def test_parse_error_writes_nothing(self, service, store, location, make_xlsx):
        store.create_employee(location.id, "Ann", "Lee")
        with pytest.raises(ReportParseError):
            service.import_bio(location.id, make_xlsx([["Name"], ["Smith, John"]]), "bio.xlsx")
        assert store.list_employees(location.id, active_only=True)


class TestImportBirthdatesAndDepartments:
    def test_birthdates(self, service, store, location, make_xlsx):
        emp = store.create_employee(location.id, "John", "Smith", "Smith, John")
        data = make_xlsx([["Employee Name", "Birth Date"], ["Smith, John", "1/2/2006"]])
        result = service.import_birthdates(location.id, data, "b.xlsx")
        assert result.updated == 1
        assert store.get_employee(location.id, emp.id).birthday == "2006-01-02"

    def test_departments(self, service, store, location):
        emp = store.create_employee(location.id, "John", "Smith")
        result = service.import_departments(location.id, STAFF_HTML)
        assert result.updated == 1
        assert store.get_employee(location.id, emp.id).department == "BOH"


class TestManualEdits:
    def test_add_requires_names(self, service, location):
        with pytest.raises(InvalidInputError):
            service.add_employee(location.id, "John", " ")

    def test_add_sets_time_punch_name(self, service, location):
        emp = service.add_employee(location.id, " John ", "Smith")
        assert emp.time_punch_name == "smith, john"

    def test_update_validates_and_keeps_time_punch_name(self, service, store, location):
        emp = service.add_employee(location.id, "John", "Smith")
        updated = service.update_employee(
            location.id, emp.id,
            first_name="Johnny", last_name="Smith", birthday="1990-05-06",
            department="boh", annual_salary="$52,000",
        )
        assert updated.department == "BOH"
        assert updated.annual_salary == Decimal("52000")
        assert updated.time_punch_key == "smith, john"

    @pytest.mark.parametrize("field,value", [
        ("department", "KITCHEN"),
        ("birthday", "06/05/1990"),
        ("annual_salary", "lots"),
        ("annual_salary", "-5"),
    ])
    def test_update_rejects_bad_input(self, service, location, field, value):
        emp = service.add_employee(location.id, "John", "Smith")
        with pytest.raises(InvalidInputError):
            service.update_employee(location.id, emp.id, first_name="John", last_name="Smith", **{field: value})

    def test_terminate_reinstate_delete(self, service, store, location):
        emp = service.add_employee(location.id, "John", "Smith")
        service.terminate_employee(location.id, emp.id, on=RUN_DATE)
        assert store.get_employee(location.id, emp.id).is_terminated
        service.reinstate_employee(location.id, emp.id)
        assert not store.get_employee(location.id, emp.id).is_terminated
        service.delete_employee(location.id, emp.id)
        with pytest.raises(EmployeeNotFoundError):
            store.get_employee(location.id, emp.id)
