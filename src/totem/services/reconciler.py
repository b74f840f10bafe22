"""Reconcile imported roster rows against a location's existing employees.

Planning is pure: ``plan_*`` functions take the current roster plus parsed
rows and return an ordered list of :class:`PlannedAction`. ``apply_plan``
then issues one store call per action and stops at the first store error.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel

from totem.core.exceptions import StoreError
from totem.core.logging import get_logger
from totem.core.protocols import IStore
from totem.core.types import NameKey, TimePunchKey
from totem.models.employee import Employee
from totem.models.imports import BioEmployeeRow, BirthdateRow, DepartmentRow
from totem.parsers.names import canonical_time_punch_name, normalize_name_key

log = get_logger("totem.services.reconciler")


class ActionKind(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    TERMINATE = "terminate"
    REINSTATE = "reinstate"


class PlannedAction(BaseModel):
    """One store write. ``None`` fields on an update keep the stored value."""

    kind: ActionKind
    employee_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    time_punch_name: str = ""
    birthday: Optional[str] = None
    department: Optional[str] = None
    termination_date: Optional[date] = None


class ApplyResult(BaseModel):
    created: int = 0
    updated: int = 0
    terminated: int = 0
    reinstated: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated + self.terminated + self.reinstated


class EmployeeIndex:
    """Lookups over a roster by time-punch key and by strict name key.

    When two employees share a key the first one listed wins.
    """

    def __init__(self, employees: Iterable[Employee]) -> None:
        self.by_time_punch: dict[TimePunchKey, Employee] = {}
        self.by_name_key: dict[NameKey, Employee] = {}
        for emp in employees:
            if emp.time_punch_key:
                self.by_time_punch.setdefault(emp.time_punch_key, emp)
            if emp.name_key:
                self.by_name_key.setdefault(emp.name_key, emp)

    def time_punch(self, first: str, last: str) -> Optional[Employee]:
        return self.by_time_punch.get(canonical_time_punch_name(first, last))

    def strict(self, first: str, last: str) -> Optional[Employee]:
        key = normalize_name_key(first, last)
        return self.by_name_key.get(key) if key else None


def plan_bio_import(
    existing: list[Employee], rows: list[BioEmployeeRow], run_date: date
) -> list[PlannedAction]:
    """Diff an employee bio roster against the stored roster.

    Active rows create, rename or reinstate; every stored employee absent from
    the active rows is terminated as of ``run_date``.
    """
    index = EmployeeIndex(existing)

    active: dict[TimePunchKey, BioEmployeeRow] = {}
    for row in rows:
        if not row.terminated:
            active[row.time_punch_name] = row  # last row wins

    actions: list[PlannedAction] = []
    matched: set[int] = set()
    for key, row in active.items():
        emp = index.by_time_punch.get(key) or index.strict(row.first_name, row.last_name)
        if emp is None:
            actions.append(PlannedAction(
                kind=ActionKind.CREATE,
                first_name=row.first_name,
                last_name=row.last_name,
                time_punch_name=row.time_punch_name,
            ))
            continue
        if emp.id in matched:
            continue
        matched.add(emp.id)

        if emp.is_terminated:
            actions.append(PlannedAction(kind=ActionKind.REINSTATE, employee_id=emp.id))
        if emp.first_name != row.first_name or emp.last_name != row.last_name:
            actions.append(PlannedAction(
                kind=ActionKind.UPDATE,
                employee_id=emp.id,
                first_name=row.first_name,
                last_name=row.last_name,
            ))

    for emp in existing:
        if emp.id not in matched and not emp.is_terminated:
            actions.append(PlannedAction(
                kind=ActionKind.TERMINATE, employee_id=emp.id, termination_date=run_date,
            ))
    return actions


def plan_birthdate_updates(existing: list[Employee], rows: list[BirthdateRow]) -> list[PlannedAction]:
    index = EmployeeIndex(existing)
    actions: list[PlannedAction] = []
    for row in rows:
        emp = index.by_time_punch.get(row.time_punch_name)
        if emp is None or emp.birthday == row.birthday:
            continue
        actions.append(PlannedAction(kind=ActionKind.UPDATE, employee_id=emp.id, birthday=row.birthday))
    return actions


def match_department_row(index: EmployeeIndex, row: DepartmentRow) -> Optional[Employee]:
    """Strict name, then strict preferred name, then time-punch key."""
    emp = index.strict(row.first_name, row.last_name)
    if emp is None and row.preferred_name:
        emp = index.strict(row.preferred_name, row.last_name)
    if emp is None:
        emp = index.time_punch(row.first_name, row.last_name)
    return emp


def plan_department_updates(existing: list[Employee], rows: list[DepartmentRow]) -> list[PlannedAction]:
    index = EmployeeIndex(existing)
    actions: list[PlannedAction] = []
    for row in rows:
        emp = match_department_row(index, row)
        if emp is None or emp.department == row.department:
            continue
        actions.append(PlannedAction(kind=ActionKind.UPDATE, employee_id=emp.id, department=row.department))
    return actions


def _apply_update(store: IStore, location_id: int, action: PlannedAction) -> None:
    current = store.get_employee(location_id, action.employee_id)
    store.update_employee(
        location_id,
        current.id,
        first_name=action.first_name if action.first_name is not None else current.first_name,
        last_name=action.last_name if action.last_name is not None else current.last_name,
        birthday=action.birthday if action.birthday is not None else current.birthday,
        department=action.department if action.department is not None else current.department,
        annual_salary=current.annual_salary,
    )


def apply_plan(store: IStore, location_id: int, plan: list[PlannedAction]) -> ApplyResult:
    """Apply actions in order. A store error aborts the rest and propagates."""
    result = ApplyResult()
    for action in plan:
        try:
            if action.kind == ActionKind.CREATE:
                store.create_employee(
                    location_id, action.first_name or "", action.last_name or "", action.time_punch_name,
                )
                result.created += 1
            elif action.kind == ActionKind.UPDATE:
                _apply_update(store, location_id, action)
                result.updated += 1
            elif action.kind == ActionKind.TERMINATE:
                store.terminate_employee(location_id, action.employee_id, action.termination_date)
                result.terminated += 1
            elif action.kind == ActionKind.REINSTATE:
                store.reinstate_employee(location_id, action.employee_id)
                result.reinstated += 1
        except StoreError as exc:
            log.error(
                "reconcile_apply_failed",
                location_id=location_id,
                action=str(action.kind),
                employee_id=action.employee_id,
                applied=result.total,
                error=str(exc),
            )
            raise
    return result
