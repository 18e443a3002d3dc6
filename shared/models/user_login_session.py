from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.models.users import new_id, utc_now


class UserLoginSession(Base):
    __tablename__ = "user_login_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey(
        "users.id", ondelete="CASCADE"), nullable=False, index=True)
    ip_address = Column(String(50), nullable=True)
    user_agent = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    logged_out_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("Users", back_populates="login_sessions")
