"""Totem exception hierarchy."""

from __future__ import annotations


class TotemError(Exception):
    """Base exception for all Totem errors."""


class ReportParseError(TotemError):
    """An uploaded export could not be parsed as a whole."""


class MissingColumnError(ReportParseError):
    """A required spreadsheet column is absent from the header row."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"missing required column: {column}")


class SpreadsheetError(ReportParseError):
    """Spreadsheet bytes are unreadable, empty, or have an unsupported shape."""


class InvalidInputError(TotemError):
    """Manually entered form values were rejected."""


class StoreError(TotemError):
    """Persistent store operation failed."""


class NotFoundError(StoreError):
    """A requested record does not exist."""

    def __init__(self, kind: str, key: object) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key!r}")


class LocationNotFoundError(NotFoundError):
    def __init__(self, location_id: int) -> None:
        super().__init__("location", location_id)


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, employee_id: int) -> None:
        super().__init__("employee", employee_id)
