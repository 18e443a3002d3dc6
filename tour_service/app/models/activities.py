from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from shared.core.database import Base
from shared.models.users import new_id, utc_now


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(String(32), nullable=False)
    currency = Column(String(8), nullable=False, default="MAD")
    image = Column(Text, nullable=False)
    photos = Column(JSON, default=list)
    category = Column(String(64), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    seasonal_pricing = Column(JSON, nullable=True)
    getyourguide_price = Column(Integer, nullable=True)
    availability = Column(String(128), nullable=True)
    duration = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
