"""
Storage backend factory.
Configures which storage slot the booking store persists to.
"""

from booking_ledger.core.config import Settings, get_settings
from booking_ledger.core.logging import get_logger
from booking_ledger.infrastructure.redis_client import get_redis
from booking_ledger.services.interfaces.storage import StorageAdapter
from booking_ledger.services.storage import FileStorage, MemoryStorage, RedisStorage

logger = get_logger(__name__)


def get_storage(settings: Settings = None) -> StorageAdapter:
    """
    Build the configured storage backend.

    STORAGE_BACKEND selects the slot:
    - file (default): JSON file at STORAGE_PATH
    - redis: key STORAGE_KEY on REDIS_URL
    - memory: nothing survives a restart
    """
    settings = settings or get_settings()
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "redis":
        storage = RedisStorage(get_redis(), key=settings.STORAGE_KEY)
    elif backend == "memory":
        storage = MemoryStorage()
    else:
        if backend != "file":
            logger.warning("unknown_storage_backend", backend=backend, fallback="file")
        storage = FileStorage(settings.STORAGE_PATH)

    logger.info("storage_selected", backend=storage.name)
    return storage
