"""Employee roster management: spreadsheet/HTML imports and manual edits."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from totem.core.exceptions import InvalidInputError
from totem.core.logging import get_logger
from totem.models.employee import Department, Employee
from totem.parsers.hotschedules import parse_department_rows
from totem.parsers.names import canonical_time_punch_name
from totem.parsers.roster import parse_bio_employees, parse_birthdates
from totem.services.base import BaseService
from totem.services.reconciler import (
    ApplyResult,
    apply_plan,
    plan_bio_import,
    plan_birthdate_updates,
    plan_department_updates,
)

log = get_logger("totem.services.employees")


def _parse_salary(value: str) -> Optional[Decimal]:
    value = (value or "").strip().replace("$", "").replace(",", "")
    if not value:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise InvalidInputError(f"invalid annual salary: {value!r}") from None
    if not amount.is_finite() or amount < 0:
        raise InvalidInputError(f"invalid annual salary: {value!r}")
    return amount if amount > 0 else None


class EmployeeService(BaseService):
    """Parse, reconcile and persist employee imports for one location at a time."""

    def list_employees(self, location_id: int, *, active_only: bool = False) -> list[Employee]:
        self._store.get_location(location_id)
        return self._store.list_employees(location_id, active_only=active_only)

    # ---- imports ----

    def import_bio(
        self, location_id: int, data: bytes, filename: str, run_date: date | None = None
    ) -> ApplyResult:
        """Sync the roster with an employee bio export; absent employees are terminated."""
        rows = parse_bio_employees(data, filename)
        existing = self._store.list_employees(location_id)
        plan = plan_bio_import(existing, rows, run_date or date.today())
        result = apply_plan(self._store, location_id, plan)
        log.info(
            "bio_import_applied",
            location_id=location_id,
            rows=len(rows),
            created=result.created,
            updated=result.updated,
            terminated=result.terminated,
            reinstated=result.reinstated,
        )
        return result

    def import_birthdates(self, location_id: int, data: bytes, filename: str) -> ApplyResult:
        rows = parse_birthdates(data, filename)
        existing = self._store.list_employees(location_id)
        result = apply_plan(self._store, location_id, plan_birthdate_updates(existing, rows))
        log.info("birthdate_import_applied", location_id=location_id, rows=len(rows), updated=result.updated)
        return result

    def import_departments(self, location_id: int, html: str) -> ApplyResult:
        rows = parse_department_rows(html)
        existing = self._store.list_employees(location_id)
        result = apply_plan(self._store, location_id, plan_department_updates(existing, rows))
        log.info("department_import_applied", location_id=location_id, rows=len(rows), updated=result.updated)
        return result

    # ---- manual edits ----

    def add_employee(self, location_id: int, first_name: str, last_name: str) -> Employee:
        first, last = (first_name or "").strip(), (last_name or "").strip()
        if not first or not last:
            raise InvalidInputError("first name and last name are required")
        return self._store.create_employee(location_id, first, last, canonical_time_punch_name(first, last))

    def update_employee(
        self,
        location_id: int,
        employee_id: int,
        *,
        first_name: str,
        last_name: str,
        birthday: str = "",
        department: str = "",
        annual_salary: str = "",
    ) -> Employee:
        """Manual edit. The stored time-punch name is kept so punch reports still match."""
        first, last = (first_name or "").strip(), (last_name or "").strip()
        if not first or not last:
            raise InvalidInputError("first name and last name are required")
        department = (department or "").strip().upper()
        if department and department not in Department.__members__:
            raise InvalidInputError(f"unknown department: {department!r}")
        birthday = (birthday or "").strip()
        if birthday:
            try:
                birthday = date.fromisoformat(birthday).isoformat()
            except ValueError:
                raise InvalidInputError(f"invalid birthday: {birthday!r}") from None

        return self._store.update_employee(
            location_id,
            employee_id,
            first_name=first,
            last_name=last,
            birthday=birthday,
            department=department,
            annual_salary=_parse_salary(annual_salary),
        )

    def terminate_employee(self, location_id: int, employee_id: int, on: date | None = None) -> None:
        self._store.terminate_employee(location_id, employee_id, on or date.today())

    def reinstate_employee(self, location_id: int, employee_id: int) -> None:
        self._store.reinstate_employee(location_id, employee_id)

    def delete_employee(self, location_id: int, employee_id: int) -> None:
        self._store.delete_employee(location_id, employee_id)
        log.info("employee_deleted", location_id=location_id, employee_id=employee_id)
