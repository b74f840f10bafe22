"""Shared test doubles: the memory store and a variant that fails on demand."""

from __future__ import annotations

from totem.core.exceptions import StoreError
from totem.persistence.memory_backend import MemoryStore


class FailingStore(MemoryStore):
    """MemoryStore whose employee writes start failing after ``fail_after`` successes."""

    def __init__(self, fail_after: int = 0) -> None:
        super().__init__()
        self.fail_after = fail_after
        self.writes = 0

    def _count_write(self) -> None:
        if self.writes >= self.fail_after:
            raise StoreError("simulated store failure")
        self.writes += 1

    def create_employee(self, *args, **kwargs):
        self._count_write()
        return super().create_employee(*args, **kwargs)

    def update_employee(self, *args, **kwargs):
        self._count_write()
        return super().update_employee(*args, **kwargs)

    def terminate_employee(self, *args, **kwargs):
        self._count_write()
        return super().terminate_employee(*args, **kwargs)

    def reinstate_employee(self, *args, **kwargs):
        self._count_write()
        return super().reinstate_employee(*args, **kwargs)


__all__ = ["FailingStore", "MemoryStore"]
