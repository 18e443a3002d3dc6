import logging
import os
import platform
import sys
from datetime import datetime, timezone

from fastapi.responses import JSONResponse

from shared.core.config import Settings
from ..schemas.system_schemas import HealthOut, ServerHealth, StorageHealth, SystemHealthOut
from ..storage.base import Storage

logger = logging.getLogger(__name__)


def get_health(storage: Storage, settings: Settings):
    now = datetime.now(timezone.utc)
    try:
        if not storage.ping():
            raise ConnectionError("storage ping failed")
        activities = len(storage.list_activities())
    except Exception as e:
        logger.error("Health check failed: %s", e)
        body = HealthOut(status="unhealthy", timestamp=now, error="Database connection failed")
        return JSONResponse(
            status_code=503,
            content=body.model_dump(mode="json", by_alias=True, exclude_none=True))

    return HealthOut(
        status="healthy",
        timestamp=now,
        version=settings.APP_VERSION,
        storage=storage.kind,
        database="connected",
        activities=activities,
        environment=settings.APP_ENV,
    )


def get_system_health(storage: Storage, settings: Settings, started_at: datetime) -> SystemHealthOut:
    now = datetime.now(timezone.utc)
    connected = storage.ping()
    return SystemHealthOut(
        storage=StorageHealth(
            kind=storage.kind,
            status="connected" if connected else "disconnected",
            is_connected=connected,
            last_check=now,
        ),
        server=ServerHealth(
            uptime_seconds=round((now - started_at).total_seconds(), 3),
            started_at=started_at,
            python_version=sys.version.split()[0],
            platform=platform.platform(),
            pid=os.getpid(),
            app_version=settings.APP_VERSION,
            environment=settings.APP_ENV,
        ),
    )
