"""Dict-backed IStore used by tests and the ``memory`` backend setting."""

from __future__ import annotations

import itertools
from datetime import date
from decimal import Decimal
from typing import Optional

from totem.core.exceptions import EmployeeNotFoundError, LocationNotFoundError, NotFoundError
from totem.models.employee import Employee, Location
from totem.models.labor import LaborRecord
from totem.models.payroll import PayrollEvent, Salary
from totem.models.sales import SaleRecord


def _employee_sort_key(emp: Employee) -> tuple[str, str, int]:
    return emp.last_name.lower(), emp.first_name.lower(), emp.id


class MemoryStore:
    """Dict-backed IStore. Returned models are copies; mutate through the store."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._locations: dict[int, Location] = {}
        self._employees: dict[int, Employee] = {}
        self._sales: dict[tuple[int, date, str, str], SaleRecord] = {}
        self._labor: dict[tuple[int, date], LaborRecord] = {}
        self._events: dict[int, PayrollEvent] = {}
        self._salaries: dict[int, Salary] = {}

    def _require_location(self, location_id: int) -> Location:
        try:
            return self._locations[location_id]
        except KeyError:
            raise LocationNotFoundError(location_id) from None

    def _require_employee(self, location_id: int, employee_id: int) -> Employee:
        emp = self._employees.get(employee_id)
        if emp is None or emp.location_id != location_id:
            raise EmployeeNotFoundError(employee_id)
        return emp

    # ---- locations ----

    def create_location(self, name: str, number: str) -> Location:
        loc = Location(id=next(self._ids), name=name, number=number)
        self._locations[loc.id] = loc
        return loc.model_copy()

    def get_location(self, location_id: int) -> Location:
        return self._require_location(location_id).model_copy()

    def list_locations(self) -> list[Location]:
        return [loc.model_copy() for loc in sorted(self._locations.values(), key=lambda l: l.id)]

    def update_location(self, location_id: int, name: str, number: str) -> Location:
        loc = self._require_location(location_id)
        updated = loc.model_copy(update={"name": name, "number": number})
        self._locations[location_id] = updated
        return updated.model_copy()

    def delete_location(self, location_id: int) -> None:
        self._require_location(location_id)
        del self._locations[location_id]
        self._employees = {k: v for k, v in self._employees.items() if v.location_id != location_id}
        self._sales = {k: v for k, v in self._sales.items() if k[0] != location_id}
        self._labor = {k: v for k, v in self._labor.items() if k[0] != location_id}
        self._events = {k: v for k, v in self._events.items() if v.location_id != location_id}
        self._salaries = {k: v for k, v in self._salaries.items() if v.location_id != location_id}

    # ---- employees ----

    def list_employees(self, location_id: int, *, active_only: bool = False) -> list[Employee]:
        rows = [
            e for e in self._employees.values()
            if e.location_id == location_id and not (active_only and e.is_terminated)
        ]
        return [e.model_copy() for e in sorted(rows, key=_employee_sort_key)]

    def get_employee(self, location_id: int, employee_id: int) -> Employee:
        return self._require_employee(location_id, employee_id).model_copy()

    def create_employee(
        self, location_id: int, first_name: str, last_name: str, time_punch_name: str = ""
    ) -> Employee:
        self._require_location(location_id)
        emp = Employee(
            id=next(self._ids),
            location_id=location_id,
            first_name=first_name,
            last_name=last_name,
            time_punch_name=time_punch_name,
        )
        self._employees[emp.id] = emp
        return emp.model_copy()

    def update_employee(
        self,
        location_id: int,
        employee_id: int,
        *,
        first_name: str,
        last_name: str,
        birthday: str,
        department: str,
        annual_salary: Optional[Decimal] = None,
    ) -> Employee:
        emp = self._require_employee(location_id, employee_id)
        updated = Employee.model_validate({
            **emp.model_dump(),
            "first_name": first_name,
            "last_name": last_name,
            "birthday": birthday,
            "department": department,
            "annual_salary": annual_salary,
        })
        self._employees[employee_id] = updated
        return updated.model_copy()

    def terminate_employee(self, location_id: int, employee_id: int, on: date) -> None:
        emp = self._require_employee(location_id, employee_id)
        self._employees[employee_id] = emp.model_copy(update={"termination_date": on})

    def reinstate_employee(self, location_id: int, employee_id: int) -> None:
        emp = self._require_employee(location_id, employee_id)
        self._employees[employee_id] = emp.model_copy(update={"termination_date": None})

    def delete_employee(self, location_id: int, employee_id: int) -> None:
        self._require_employee(location_id, employee_id)
        del self._employees[employee_id]

    # ---- sales ----

    def save_sales_batch(self, location_id: int, business_date: date, records: list[SaleRecord]) -> None:
        self._require_location(location_id)
        for rec in records:
            key = (location_id, business_date, str(rec.category), rec.item)
            self._sales[key] = rec.model_copy(
                update={"location_id": location_id, "business_date": business_date}
            )

    def get_sales_by_date(self, location_id: int, business_date: date) -> list[SaleRecord]:
        return self.get_sales_in_range(location_id, business_date, business_date)

    def get_sales_in_range(self, location_id: int, start: date, end: date) -> list[SaleRecord]:
        keys = sorted(k for k in self._sales if k[0] == location_id and start <= k[1] <= end)
        return [self._sales[k].model_copy() for k in keys]

    # ---- labor ----

    def save_labor(self, record: LaborRecord) -> None:
        self._require_location(record.location_id)
        if record.business_date is None:
            raise ValueError("labor record requires a business date")
        self._labor[(record.location_id, record.business_date)] = record.model_copy()

    def get_labor_by_date(self, location_id: int, business_date: date) -> Optional[LaborRecord]:
        rec = self._labor.get((location_id, business_date))
        return rec.model_copy() if rec is not None else None

    def get_labor_in_range(self, location_id: int, start: date, end: date) -> list[LaborRecord]:
        keys = sorted(k for k in self._labor if k[0] == location_id and start <= k[1] <= end)
        return [self._labor[k].model_copy() for k in keys]

    # ---- payroll events & salaries ----

    def create_payroll_event(self, event: PayrollEvent) -> PayrollEvent:
        self._require_employee(event.location_id, event.employee_id)
        stored = event.model_copy(update={"id": next(self._ids)})
        self._events[stored.id] = stored
        return stored.model_copy()

    def list_payroll_events(self, location_id: int, start: date, end: date) -> list[PayrollEvent]:
        rows = [
            e for e in self._events.values()
            if e.location_id == location_id and start <= e.event_date <= end
        ]
        return [e.model_copy() for e in sorted(rows, key=lambda e: (e.event_date, e.id))]

    def delete_payroll_event(self, location_id: int, event_id: int) -> None:
        event = self._events.get(event_id)
        if event is None or event.location_id != location_id:
            raise NotFoundError("payroll event", event_id)
        del self._events[event_id]

    def create_salary(self, location_id: int, name: str, annual_amount: Decimal) -> Salary:
        self._require_location(location_id)
        salary = Salary(id=next(self._ids), location_id=location_id, name=name, annual_amount=annual_amount)
        self._salaries[salary.id] = salary
        return salary.model_copy()

    def list_salaries(self, location_id: int) -> list[Salary]:
        rows = [s for s in self._salaries.values() if s.location_id == location_id]
        return [s.model_copy() for s in sorted(rows, key=lambda s: s.id)]

    def delete_salary(self, location_id: int, salary_id: int) -> None:
        salary = self._salaries.get(salary_id)
        if salary is None or salary.location_id != location_id:
            raise NotFoundError("salary", salary_id)
        del self._salaries[salary_id]
