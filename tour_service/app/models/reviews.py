from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from shared.core.database import Base
from shared.models.users import new_id, utc_now


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=new_id)
    customer_name = Column(String(200), nullable=False)
    customer_email = Column(String(200), nullable=False)
    activity_id = Column(String(36), nullable=False, index=True)
    booking_id = Column(String(36), nullable=True)
    rating = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    comment = Column(Text, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    approved = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
