"""Integration tests for DynamoDBStore against LocalStack."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from totem.models.labor import LaborRecord
from totem.persistence.dynamodb_backend import DynamoDBStore
from tests.integration.conftest import LOCALSTACK_URL, skip_no_localstack


@skip_no_localstack
class TestDynamoDBIntegration:
    @pytest.fixture
    def store(self, created_table):
        return DynamoDBStore(
            table_suffix=created_table,
            region="us-east-1",
            endpoint_url=LOCALSTACK_URL,
        )

    @pytest.fixture
    def location(self, store):
        loc = store.create_location("Integration", "99999")
        yield loc
        store.delete_location(loc.id)

    def test_employee_lifecycle(self, store, location):
        emp = store.create_employee(location.id, "John", "Smith", "smith, john")
        store.terminate_employee(location.id, emp.id, date(2024, 3, 1))
        assert store.get_employee(location.id, emp.id).is_terminated

        store.reinstate_employee(location.id, emp.id)
        assert not store.get_employee(location.id, emp.id).is_terminated

    def test_labor_round_trip(self, store, location):
        store.save_labor(LaborRecord(
            location_id=location.id,
            business_date=date(2024, 3, 1),
            regular_hours=Decimal("427.5"),
            regular_wages=Decimal("6328.40"),
        ))
        rec = store.get_labor_by_date(location.id, date(2024, 3, 1))
        assert rec.regular_wages == Decimal("6328.40")
