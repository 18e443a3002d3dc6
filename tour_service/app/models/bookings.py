from sqlalchemy import JSON, Column, Date, DateTime, Integer, String, Text

from shared.core.database import Base
from shared.models.users import new_id, utc_now


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=new_id)
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(32), nullable=False)
    customer_email = Column(String(200), nullable=True)
    # no FK: a booking outlives the activity it was made for
    activity_id = Column(String(36), nullable=False, index=True)
    number_of_people = Column(Integer, nullable=False)
    preferred_date = Column(Date, nullable=False)
    participant_names = Column(JSON, default=list)
    status = Column(String(16), nullable=False, default="pending")
    total_amount = Column(String(32), nullable=False)
    notes = Column(Text, nullable=True)
    payment_status = Column(String(16), nullable=False, default="unpaid")
    payment_method = Column(String(16), nullable=True)
    paid_amount = Column(Integer, nullable=False, default=0)
    deposit_amount = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
