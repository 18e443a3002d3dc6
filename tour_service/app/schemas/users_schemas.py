from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from shared.core.schemas import CamelModel, TimestampedRecord, as_utc


class UserRecord(TimestampedRecord):
    username: str
    password_hash: str = Field(exclude=True)
    role: str


class LoginSessionRecord(CamelModel):
    id: str
    user_id: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    expires_at: datetime
    logged_out_at: Optional[datetime] = None

    @field_validator("created_at", "expires_at", "logged_out_at", mode="after")
    @classmethod
    def ensure_utc(cls, value: Optional[datetime]):
        return as_utc(value)
