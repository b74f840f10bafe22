"""Protocol interfaces for Totem's external collaborators.

Services depend on these Protocols only; backends satisfy them structurally
and tests swap in the dict-backed memory implementation.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, runtime_checkable

from totem.models.employee import Employee, Location
from totem.models.labor import LaborRecord
from totem.models.payroll import PayrollEvent, Salary
from totem.models.sales import SaleRecord


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------

@runtime_checkable
class ILocationStore(Protocol):
    def create_location(self, name: str, number: str) -> Location: ...

    def get_location(self, location_id: int) -> Location: ...

    def list_locations(self) -> list[Location]: ...

    def update_location(self, location_id: int, name: str, number: str) -> Location: ...

    def delete_location(self, location_id: int) -> None: ...


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------

@runtime_checkable
class IEmployeeStore(Protocol):
    def list_employees(self, location_id: int, *, active_only: bool = False) -> list[Employee]: ...

    def get_employee(self, location_id: int, employee_id: int) -> Employee: ...

    def create_employee(
        self, location_id: int, first_name: str, last_name: str, time_punch_name: str = ""
    ) -> Employee: ...

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
    ) -> Employee: ...

    def terminate_employee(self, location_id: int, employee_id: int, on: date) -> None: ...

    def reinstate_employee(self, location_id: int, employee_id: int) -> None: ...

    def delete_employee(self, location_id: int, employee_id: int) -> None: ...


# ---------------------------------------------------------------------------
# Sales and labor
# ---------------------------------------------------------------------------

@runtime_checkable
class ISalesStore(Protocol):
    def save_sales_batch(self, location_id: int, business_date: date, records: list[SaleRecord]) -> None: ...

    def get_sales_by_date(self, location_id: int, business_date: date) -> list[SaleRecord]: ...

    def get_sales_in_range(self, location_id: int, start: date, end: date) -> list[SaleRecord]: ...


@runtime_checkable
class ILaborStore(Protocol):
    def save_labor(self, record: LaborRecord) -> None: ...

    def get_labor_by_date(self, location_id: int, business_date: date) -> Optional[LaborRecord]: ...

    def get_labor_in_range(self, location_id: int, start: date, end: date) -> list[LaborRecord]: ...


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------

@runtime_checkable
class IPayrollStore(Protocol):
    def create_payroll_event(self, event: PayrollEvent) -> PayrollEvent: ...

    def list_payroll_events(self, location_id: int, start: date, end: date) -> list[PayrollEvent]: ...

    def delete_payroll_event(self, location_id: int, event_id: int) -> None: ...

    def create_salary(self, location_id: int, name: str, annual_amount: Decimal) -> Salary: ...

    def list_salaries(self, location_id: int) -> list[Salary]: ...

    def delete_salary(self, location_id: int, salary_id: int) -> None: ...


@runtime_checkable
class IStore(ILocationStore, IEmployeeStore, ISalesStore, ILaborStore, IPayrollStore, Protocol):
    """The full persistent store consumed by the services."""
