from datetime import datetime
from typing import Optional

from pydantic import field_validator

from shared.core.schemas import CamelModel, as_utc


class AuditLogOut(CamelModel):
    id: str
    user_id: str
    action: str
    details: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("created_at", mode="after")
    @classmethod
    def ensure_utc(cls, value: Optional[datetime]):
        return as_utc(value)
