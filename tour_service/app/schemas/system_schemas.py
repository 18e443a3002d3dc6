from datetime import datetime
from typing import Optional

from shared.core.schemas import CamelModel


class HealthOut(CamelModel):
    status: str
    timestamp: datetime
    version: Optional[str] = None
    storage: Optional[str] = None
    database: Optional[str] = None
    activities: Optional[int] = None
    environment: Optional[str] = None
    error: Optional[str] = None


class StorageHealth(CamelModel):
    kind: str
    status: str
    is_connected: bool
    last_check: datetime


class ServerHealth(CamelModel):
    uptime_seconds: float
    started_at: datetime
    python_version: str
    platform: str
    pid: int
    app_version: str
    environment: str


class SystemHealthOut(CamelModel):
    storage: StorageHealth
    server: ServerHealth
