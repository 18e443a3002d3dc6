from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from shared.core.schemas import CamelInput, TimestampedRecord
from ..enum.booking_enum import BookingStatus, PaymentMethod, PaymentMode, PaymentStatus
from .activities_schemas import ActivityOut
from .whatsapp_schemas import BookingNotification, PaymentNotification


# ---------------- Booking Output ----------------
class BookingOut(TimestampedRecord):
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    activity_id: str
    number_of_people: int
    preferred_date: date
    participant_names: List[str] = []
    status: str = BookingStatus.pending.value
    total_amount: str
    notes: Optional[str] = None
    payment_status: str = PaymentStatus.unpaid.value
    payment_method: Optional[str] = None
    paid_amount: int = 0
    deposit_amount: Optional[int] = None

    @field_validator("participant_names", mode="before")
    @classmethod
    def default_names(cls, value):
        return value or []


class BookingWithActivityOut(BookingOut):
    activity: Optional[ActivityOut] = None


class BookingCreatedOut(BookingOut):
    notification: Optional[BookingNotification] = None


class BookingPaymentOut(BookingOut):
    notification: Optional[PaymentNotification] = None


# ---------------- Booking Create ----------------
class BookingCreate(CamelInput):
    customer_name: str = Field(min_length=1, max_length=200)
    customer_phone: str = Field(min_length=1, max_length=32)
    customer_email: Optional[str] = Field(default=None, max_length=200)
    activity_id: str = Field(min_length=1)
    number_of_people: int = Field(ge=1)
    preferred_date: date
    participant_names: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("preferred_date", mode="before")
    @classmethod
    def date_part_only(cls, value):
        # browsers send full ISO timestamps, keep the calendar day
        if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
            return value[:10]
        return value

    @field_validator("customer_email", mode="before")
    @classmethod
    def empty_email_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ---------------- Status / Payment Updates ----------------
class BookingStatusUpdate(CamelInput):
    status: BookingStatus


class BookingPaymentUpdate(CamelInput):
    """Either a raw payment record or a `mode` the server turns into one."""
    mode: Optional[PaymentMode] = None
    amount: Optional[int] = Field(default=None, ge=0)

    payment_status: Optional[PaymentStatus] = None
    paid_amount: Optional[int] = Field(default=None, ge=0)
    payment_method: Optional[PaymentMethod] = None
    deposit_amount: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def mode_or_status(self):
        if self.mode is None and self.payment_status is None:
            raise ValueError("Either mode or paymentStatus is required")
        if "paid_amount" in self.model_fields_set and self.paid_amount is None:
            raise ValueError("paidAmount cannot be null")
        return self
