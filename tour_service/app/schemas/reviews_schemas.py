from typing import Optional

from pydantic import EmailStr, Field

from shared.core.schemas import CamelInput, TimestampedRecord
from .activities_schemas import ActivityOut


class ReviewOut(TimestampedRecord):
    customer_name: str
    customer_email: str
    activity_id: str
    booking_id: Optional[str] = None
    rating: int
    title: str
    comment: str
    verified: bool = False
    approved: bool = False


class ReviewWithActivityOut(ReviewOut):
    activity: Optional[ActivityOut] = None


class ReviewCreate(CamelInput):
    customer_name: str = Field(min_length=1, max_length=200)
    customer_email: EmailStr
    activity_id: str = Field(min_length=1)
    booking_id: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=1, max_length=200)
    comment: str = Field(min_length=1)


class ReviewApprovalUpdate(CamelInput):
    approved: bool
