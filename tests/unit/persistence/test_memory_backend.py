"""Unit tests for the dict-backed MemoryStore."""

from __future__ import annotations

from datetime import date

import pytest

from totem.models.labor import LaborRecord
from totem.persistence.memory_backend import MemoryStore
from tests.unit.persistence.contract import StoreContract


class TestMemoryStore(StoreContract):
    @pytest.fixture
    def store(self):
        return MemoryStore()

    def test_returned_models_are_copies(self, store, location):
        emp = store.create_employee(location.id, "John", "Smith")
        emp.first_name = "Changed"
        assert store.get_employee(location.id, emp.id).first_name == "John"

    def test_labor_requires_date(self, store, location):
        with pytest.raises(ValueError):
            store.save_labor(LaborRecord(location_id=location.id))

    def test_ids_are_unique_across_kinds(self, store, location):
        emp = store.create_employee(location.id, "John", "Smith")
        salary = store.create_salary(location.id, "GM", 1)
        assert len({location.id, emp.id, salary.id}) == 3
        assert store.get_labor_by_date(location.id, date(2024, 1, 1)) is None
