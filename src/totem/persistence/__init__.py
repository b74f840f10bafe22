"""Pluggable persistence backends behind the IStore Protocol."""

from __future__ import annotations

from totem.core.config import AppSettings
from totem.core.logging import get_logger
from totem.core.protocols import IStore
from totem.persistence.dynamodb_backend import DynamoDBStore
from totem.persistence.memory_backend import MemoryStore

log = get_logger("totem.persistence")


def create_persistence(settings: AppSettings | None = None) -> IStore:
    """Create the store selected by ``settings.persistence_backend``."""
    if settings is None:
        settings = AppSettings()

    if settings.persistence_backend == "dynamodb":
        store: IStore = DynamoDBStore(
            table_name=settings.dynamodb.table_name,
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )
    else:
        store = MemoryStore()

    log.info("persistence_created", backend=settings.persistence_backend)
    return store
