import logging
import time

from sqlalchemy.exc import SQLAlchemyError

from shared.core.config import Settings
from .base import Storage
from .memory_storage import MemoryStorage
from .sql_storage import SqlStorage

logger = logging.getLogger(__name__)


class StorageUnavailableError(RuntimeError):
    pass


def _connect_sql(settings: Settings) -> SqlStorage:
    storage = SqlStorage(settings.database_url)
    # development gets one attempt, the fallback is immediate
    attempts = 1 if settings.is_development else max(settings.DB_CONNECT_RETRIES, 1)

    for attempt in range(1, attempts + 1):
        try:
            storage.create_tables()
            if storage.ping():
                logger.info("Connected to database on attempt %s", attempt)
                return storage
        except SQLAlchemyError as e:
            logger.warning("Database connection attempt %s/%s failed: %s",
                           attempt, attempts, e)
        if attempt < attempts:
            time.sleep(settings.DB_RETRY_DELAY_SECONDS)

    storage.close()
    raise StorageUnavailableError("Database unreachable")


def build_storage(settings: Settings) -> Storage:
    """Pick the storage backend once at startup."""
    if not settings.database_url:
        logger.info("No database configured, using in-memory storage")
        return MemoryStorage()

    try:
        return _connect_sql(settings)
    except (StorageUnavailableError, SQLAlchemyError) as e:
        if not settings.ALLOW_MEMORY_FALLBACK:
            raise
        logger.warning(
            "Database unavailable (%s), falling back to in-memory storage. Data will not persist!", e)
        return MemoryStorage()
