"""DynamoDB backend implementing IStore on a single PK/SK table.

Layout::

    PK=LOCATIONS       SK=LOCATION#<id>
    PK=LOCATION#<id>   SK=EMPLOYEE#<id>
                       SK=SALE#<date>#<category>#<item>
                       SK=LABOR#<date>
                       SK=PAYROLL#<date>#<id>
                       SK=SALARY#<id>
    PK=COUNTER         SK=ID            (atomic id sequence)
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

import boto3
from botocore.exceptions import ClientError

from totem.core.exceptions import (
    EmployeeNotFoundError,
    LocationNotFoundError,
    NotFoundError,
    StoreError,
)
from totem.core.logging import get_logger
from totem.core.types import JsonDict
from totem.models.employee import Employee, Location
from totem.models.labor import LaborRecord
from totem.models.payroll import PayrollEvent, Salary
from totem.models.sales import SaleRecord

log = get_logger("totem.persistence.dynamodb")

LOCATIONS_PK = "LOCATIONS"
COUNTER_KEY = {"PK": "COUNTER", "SK": "ID"}


def _loc_pk(location_id: int) -> str:
    return f"LOCATION#{location_id}"


def _id_sk(prefix: str, ident: int) -> str:
    return f"{prefix}#{ident:010d}"


def _encode_value(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return str(value)  # plain str for StrEnum members
    if isinstance(value, dict):
        return {k: _encode_value(v) for k, v in value.items()}
    return value


def _to_item(pk: str, sk: str, data: JsonDict) -> JsonDict:
    item = {k: _encode_value(v) for k, v in data.items() if v is not None}
    item["PK"] = pk
    item["SK"] = sk
    return item


def _decode_item(item: JsonDict) -> JsonDict:
    """Strip keys; integral Decimals become ints, fractional ones stay Decimal."""
    out: JsonDict = {}
    for k, v in item.items():
        if k in ("PK", "SK"):
            continue
        if isinstance(v, Decimal) and v == v.to_integral_value():
            out[k] = int(v)
        else:
            out[k] = v
    return out


class DynamoDBStore:
    """Production IStore backed by DynamoDB."""

    def __init__(self, table_name: str = "totem-records", table_suffix: str = "",
                 region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        self._table_name = f"{table_name}{table_suffix}"
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._table = self._ddb.Table(self._table_name)

    # ---- low-level helpers ----

    def _call(self, op: str, fn, **kwargs) -> JsonDict:
        try:
            return fn(**kwargs)
        except ClientError as exc:
            log.error("dynamodb_call_failed", op=op, table=self._table_name, error=str(exc))
            raise StoreError(f"DynamoDB {op} failed on {self._table_name!r}: {exc}") from exc

    def _get(self, pk: str, sk: str) -> JsonDict | None:
        resp = self._call("get_item", self._table.get_item, Key={"PK": pk, "SK": sk})
        item = resp.get("Item")
        return _decode_item(item) if item else None

    def _put(self, pk: str, sk: str, data: JsonDict) -> None:
        self._call("put_item", self._table.put_item, Item=_to_item(pk, sk, data))

    def _delete(self, pk: str, sk: str) -> None:
        self._call("delete_item", self._table.delete_item, Key={"PK": pk, "SK": sk})

    def _query(self, pk: str, condition: str, values: JsonDict) -> list[JsonDict]:
        """Query every page for a partition key plus an SK condition."""
        items: list[JsonDict] = []
        kwargs: JsonDict = {
            "KeyConditionExpression": f"PK = :pk AND {condition}",
            "ExpressionAttributeValues": {":pk": pk, **values},
        }
        while True:
            resp = self._call("query", self._table.query, **kwargs)
            items.extend(resp.get("Items", []))
            last = resp.get("LastEvaluatedKey")
            if not last:
                return items
            kwargs["ExclusiveStartKey"] = last

    def _query_prefix(self, pk: str, prefix: str) -> list[JsonDict]:
        return self._query(pk, "begins_with(SK, :prefix)", {":prefix": prefix})

    def _query_between(self, pk: str, low: str, high: str) -> list[JsonDict]:
        return self._query(pk, "SK BETWEEN :low AND :high", {":low": low, ":high": high})

    def _next_id(self) -> int:
        resp = self._call(
            "update_item", self._table.update_item,
            Key=COUNTER_KEY,
            UpdateExpression="ADD #v :one",
            ExpressionAttributeNames={"#v": "value"},
            ExpressionAttributeValues={":one": 1},
            ReturnValues="UPDATED_NEW",
        )
        return int(resp["Attributes"]["value"])

    def _update_existing(self, key: dict[str, str], not_found: NotFoundError, **kwargs: Any) -> None:
        try:
            self._table.update_item(Key=key, ConditionExpression="attribute_exists(PK)", **kwargs)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise not_found from exc
            raise StoreError(f"DynamoDB update_item failed on {self._table_name!r}: {exc}") from exc

    # ---- locations ----

    def create_location(self, name: str, number: str) -> Location:
        loc = Location(id=self._next_id(), name=name, number=number)
        self._put(LOCATIONS_PK, _id_sk("LOCATION", loc.id), loc.model_dump())
        return loc

    def get_location(self, location_id: int) -> Location:
        item = self._get(LOCATIONS_PK, _id_sk("LOCATION", location_id))
        if item is None:
            raise LocationNotFoundError(location_id)
        return Location.model_validate(item)

    def list_locations(self) -> list[Location]:
        return [
            Location.model_validate(_decode_item(i))
            for i in self._query_prefix(LOCATIONS_PK, "LOCATION#")
        ]

    def update_location(self, location_id: int, name: str, number: str) -> Location:
        loc = self.get_location(location_id).model_copy(update={"name": name, "number": number})
        self._put(LOCATIONS_PK, _id_sk("LOCATION", location_id), loc.model_dump())
        return loc

    def delete_location(self, location_id: int) -> None:
        self.get_location(location_id)
        pk = _loc_pk(location_id)
        children = self._query(pk, "SK >= :low", {":low": " "})
        try:
            with self._table.batch_writer() as batch:
                for item in children:
                    batch.delete_item(Key={"PK": item["PK"], "SK": item["SK"]})
        except ClientError as exc:
            raise StoreError(f"DynamoDB batch delete failed for location {location_id}: {exc}") from exc
        self._delete(LOCATIONS_PK, _id_sk("LOCATION", location_id))

    # ---- employees ----

    def list_employees(self, location_id: int, *, active_only: bool = False) -> list[Employee]:
        employees = [
            Employee.model_validate(_decode_item(i))
            for i in self._query_prefix(_loc_pk(location_id), "EMPLOYEE#")
        ]
        if active_only:
            employees = [e for e in employees if not e.is_terminated]
        return sorted(employees, key=lambda e: (e.last_name.lower(), e.first_name.lower(), e.id))

    def get_employee(self, location_id: int, employee_id: int) -> Employee:
        item = self._get(_loc_pk(location_id), _id_sk("EMPLOYEE", employee_id))
        if item is None:
            raise EmployeeNotFoundError(employee_id)
        return Employee.model_validate(item)

    def create_employee(
        self, location_id: int, first_name: str, last_name: str, time_punch_name: str = ""
    ) -> Employee:
        self.get_location(location_id)
        emp = Employee(
            id=self._next_id(),
            location_id=location_id,
            first_name=first_name,
            last_name=last_name,
            time_punch_name=time_punch_name,
        )
        self._put(_loc_pk(location_id), _id_sk("EMPLOYEE", emp.id), emp.model_dump())
        return emp

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
        current = self.get_employee(location_id, employee_id)
        updated = Employee.model_validate({
            **current.model_dump(),
            "first_name": first_name,
            "last_name": last_name,
            "birthday": birthday,
            "department": department,
            "annual_salary": annual_salary,
        })
        self._put(_loc_pk(location_id), _id_sk("EMPLOYEE", employee_id), updated.model_dump())
        return updated

    def terminate_employee(self, location_id: int, employee_id: int, on: date) -> None:
        self._update_existing(
            {"PK": _loc_pk(location_id), "SK": _id_sk("EMPLOYEE", employee_id)},
            EmployeeNotFoundError(employee_id),
            UpdateExpression="SET termination_date = :d",
            ExpressionAttributeValues={":d": on.isoformat()},
        )

    def reinstate_employee(self, location_id: int, employee_id: int) -> None:
        self._update_existing(
            {"PK": _loc_pk(location_id), "SK": _id_sk("EMPLOYEE", employee_id)},
            EmployeeNotFoundError(employee_id),
            UpdateExpression="REMOVE termination_date",
        )

    def delete_employee(self, location_id: int, employee_id: int) -> None:
        self.get_employee(location_id, employee_id)
        self._delete(_loc_pk(location_id), _id_sk("EMPLOYEE", employee_id))

    # ---- sales ----

    def save_sales_batch(self, location_id: int, business_date: date, records: list[SaleRecord]) -> None:
        self.get_location(location_id)
        pk = _loc_pk(location_id)
        try:
            with self._table.batch_writer(overwrite_by_pkeys=["PK", "SK"]) as batch:
                for rec in records:
                    rec = rec.model_copy(update={"location_id": location_id, "business_date": business_date})
                    sk = f"SALE#{business_date.isoformat()}#{rec.category}#{rec.item}"
                    batch.put_item(Item=_to_item(pk, sk, rec.model_dump()))
        except ClientError as exc:
            raise StoreError(f"DynamoDB sales batch failed for location {location_id}: {exc}") from exc

    def get_sales_by_date(self, location_id: int, business_date: date) -> list[SaleRecord]:
        return self.get_sales_in_range(location_id, business_date, business_date)

    def get_sales_in_range(self, location_id: int, start: date, end: date) -> list[SaleRecord]:
        items = self._query_between(
            _loc_pk(location_id), f"SALE#{start.isoformat()}", f"SALE#{end.isoformat()}#~",
        )
        return [SaleRecord.model_validate(_decode_item(i)) for i in items]

    # ---- labor ----

    def save_labor(self, record: LaborRecord) -> None:
        if record.business_date is None:
            raise ValueError("labor record requires a business date")
        self.get_location(record.location_id)
        self._put(_loc_pk(record.location_id), f"LABOR#{record.business_date.isoformat()}",
                  record.model_dump())

    def get_labor_by_date(self, location_id: int, business_date: date) -> Optional[LaborRecord]:
        item = self._get(_loc_pk(location_id), f"LABOR#{business_date.isoformat()}")
        return LaborRecord.model_validate(item) if item else None

    def get_labor_in_range(self, location_id: int, start: date, end: date) -> list[LaborRecord]:
        items = self._query_between(
            _loc_pk(location_id), f"LABOR#{start.isoformat()}", f"LABOR#{end.isoformat()}",
        )
        return [LaborRecord.model_validate(_decode_item(i)) for i in items]

    # ---- payroll events & salaries ----

    def create_payroll_event(self, event: PayrollEvent) -> PayrollEvent:
        self.get_employee(event.location_id, event.employee_id)
        stored = event.model_copy(update={"id": self._next_id()})
        sk = f"PAYROLL#{stored.event_date.isoformat()}#{stored.id:010d}"
        self._put(_loc_pk(stored.location_id), sk, stored.model_dump())
        return stored

    def list_payroll_events(self, location_id: int, start: date, end: date) -> list[PayrollEvent]:
        items = self._query_between(
            _loc_pk(location_id), f"PAYROLL#{start.isoformat()}", f"PAYROLL#{end.isoformat()}#~",
        )
        return [PayrollEvent.model_validate(_decode_item(i)) for i in items]

    def delete_payroll_event(self, location_id: int, event_id: int) -> None:
        pk = _loc_pk(location_id)
        for item in self._query_prefix(pk, "PAYROLL#"):
            if int(item.get("id", 0)) == event_id:
                self._delete(pk, item["SK"])
                return
        raise NotFoundError("payroll event", event_id)

    def create_salary(self, location_id: int, name: str, annual_amount: Decimal) -> Salary:
        self.get_location(location_id)
        salary = Salary(id=self._next_id(), location_id=location_id, name=name,
                        annual_amount=annual_amount)
        self._put(_loc_pk(location_id), _id_sk("SALARY", salary.id), salary.model_dump())
        return salary

    def list_salaries(self, location_id: int) -> list[Salary]:
        return [
            Salary.model_validate(_decode_item(i))
            for i in self._query_prefix(_loc_pk(location_id), "SALARY#")
        ]

    def delete_salary(self, location_id: int, salary_id: int) -> None:
        pk, sk = _loc_pk(location_id), _id_sk("SALARY", salary_id)
        if self._get(pk, sk) is None:
            raise NotFoundError("salary", salary_id)
        self._delete(pk, sk)
