"""Tests for LocationService."""

from __future__ import annotations

import pytest

from totem.core.exceptions import InvalidInputError, LocationNotFoundError
from totem.services.locations import LocationService


@pytest.fixture
def service(settings, store):
    return LocationService(settings=settings, store=store)


class TestLocationService:
    def test_create_update_delete(self, service):
        loc = service.create(" Main Street ", "01234")
        assert loc.name == "Main Street"
        assert service.update(loc.id, "Main St", "01234").name == "Main St"
        assert [l.id for l in service.list_locations()] == [loc.id]

        service.delete(loc.id)
        with pytest.raises(LocationNotFoundError):
            service.get(loc.id)

    @pytest.mark.parametrize("name,number", [("", "1"), ("Main", " ")])
    def test_requires_name_and_number(self, service, name, number):
        with pytest.raises(InvalidInputError):
            service.create(name, number)
