"""Tests for the HTTP layer: health probes and the performance endpoint."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from totem.api.app import create_app
from totem.core.config import AppSettings
from totem.core.exceptions import StoreError
from totem.models.labor import LaborRecord
from totem.models.sales import SaleCategory, SaleRecord
from tests.fakes import MemoryStore

DAY = date(2024, 3, 1)


class BrokenStore(MemoryStore):
    def list_locations(self):
        raise StoreError("table unavailable")

    def get_sales_in_range(self, location_id, start, end):
        raise StoreError("table unavailable")


@pytest.fixture
def store():
    store = MemoryStore()
    loc = store.create_location("Main Street", "01234")
    store.save_sales_batch(loc.id, DAY, [
        SaleRecord(location_id=loc.id, business_date=DAY, category=SaleCategory.DAY_PART,
                   item="Lunch", amount=Decimal("1000")),
    ])
    store.save_labor(LaborRecord(location_id=loc.id, business_date=DAY,
                                 regular_hours=Decimal("40"), regular_wages=Decimal("250")))
    return store


@pytest.fixture
def client(store):
    return TestClient(create_app(settings=AppSettings(), store=store))


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_ready(self, client):
        resp = client.get("/ready")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ready"}

    def test_not_ready_when_store_fails(self):
        client = TestClient(create_app(store=BrokenStore()))
        assert client.get("/ready").status_code == 503


class TestPerformanceEndpoint:
    def test_range(self, client, store):
        loc = store.list_locations()[0]
        resp = client.get(f"/api/locations/{loc.id}/performance", params={"start": "2024-03-01", "end": "2024-03-31"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["startDate"] == "2024-03-01"
        assert body["endDate"] == "2024-03-31"
        assert len(body["records"]) == 1
        assert body["records"][0]["business_date"] == "2024-03-01"
        assert body["summary"]["productivity"] == 25
        assert body["summary"]["labor_percent"] == 25

    def test_default_range(self, client, store):
        loc = store.list_locations()[0]
        body = client.get(f"/api/locations/{loc.id}/performance").json()
        assert body["endDate"] == date.today().isoformat()
        assert body["summary"]["day_count"] == 0

    def test_unknown_location(self, client):
        resp = client.get("/api/locations/999/performance")
        assert resp.status_code == 404
        assert "error" in resp.json()

    def test_invalid_location_id(self, client):
        assert client.get("/api/locations/abc/performance").status_code == 400

    def test_invalid_date(self, client, store):
        loc = store.list_locations()[0]
        resp = client.get(f"/api/locations/{loc.id}/performance", params={"start": "March 1"})
        assert resp.status_code == 400

    def test_store_error(self):
        store = BrokenStore()
        loc = store.create_location("Main", "1")
        client = TestClient(create_app(store=store))
        resp = client.get(f"/api/locations/{loc.id}/performance")
        assert resp.status_code == 500
        assert resp.json() == {"error": "table unavailable"}


class TestLifespan:
    def test_wires_configured_store(self):
        app = create_app(settings=AppSettings(persistence_backend="memory"))
        with TestClient(app) as client:
            assert isinstance(app.state.store, MemoryStore)
            assert client.get("/ready").json() == {"status": "ready"}
