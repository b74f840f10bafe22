"""Base service with common dependency wiring."""

from __future__ import annotations

from totem.core.config import AppSettings
from totem.core.protocols import IStore


class BaseService:
    """Common base for Totem services.

    Settings and the store are injected at construction time; services hold
    no other state and are safe to build per request.
    """

    def __init__(self, *, settings: AppSettings, store: IStore) -> None:
        self._settings = settings
        self._store = store
