"""Location administration."""

from __future__ import annotations

from totem.core.exceptions import InvalidInputError
from totem.core.logging import get_logger
from totem.models.employee import Location
from totem.services.base import BaseService

log = get_logger("totem.services.locations")


class LocationService(BaseService):
    def create(self, name: str, number: str) -> Location:
        name, number = (name or "").strip(), (number or "").strip()
        if not name or not number:
            raise InvalidInputError("location name and number are required")
        loc = self._store.create_location(name, number)
        log.info("location_created", location_id=loc.id, number=loc.number)
        return loc

    def update(self, location_id: int, name: str, number: str) -> Location:
        name, number = (name or "").strip(), (number or "").strip()
        if not name or not number:
            raise InvalidInputError("location name and number are required")
        return self._store.update_location(location_id, name, number)

    def delete(self, location_id: int) -> None:
        self._store.delete_location(location_id)
        log.info("location_deleted", location_id=location_id)

    def list_locations(self) -> list[Location]:
        return self._store.list_locations()

    def get(self, location_id: int) -> Location:
        return self._store.get_location(location_id)
