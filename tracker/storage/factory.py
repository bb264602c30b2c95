"""Builds the storage backend selected in settings."""

import logging

from tracker.core.config import Settings
from tracker.core.database import DatabaseManager
from tracker.storage.base import Storage
from tracker.storage.database import DatabaseStorage
from tracker.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "database")


def create_storage(settings: Settings) -> Storage:
    backend = settings.STORAGE_BACKEND.lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown storage backend {settings.STORAGE_BACKEND!r}, expected one of {BACKENDS}")

    logger.info("Using %s storage backend", backend)
    if backend == "database":
        return DatabaseStorage(DatabaseManager(url=settings.async_db_url))
    return MemoryStorage()
