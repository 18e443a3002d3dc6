import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from shared.core.database import Base, build_engine, build_session_factory
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users
from .base import Storage
from ..models.activities import Activity
from ..models.audit_logs import AuditLog
from ..models.bookings import Booking
from ..models.reviews import Review
from ..schemas.activities_schemas import ActivityOut
from ..schemas.audit_logs_schemas import AuditLogOut
from ..schemas.bookings_schemas import BookingOut
from ..schemas.reviews_schemas import ReviewOut
from ..schemas.users_schemas import LoginSessionRecord, UserRecord

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """SQLAlchemy backed storage, PostgreSQL in production."""

    kind = "sql"

    def __init__(self, database_url: str = None, engine=None):
        self.engine = engine if engine is not None else build_engine(database_url)
        self.SessionLocal = build_session_factory(self.engine)

    def create_tables(self):
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", e)
            return False

    def close(self):
        self.engine.dispose()

    @contextmanager
    def session(self):
        db: Session = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # ---------------- helpers ----------------
    def _add(self, model, schema, values: dict):
        with self.session() as db:
            row = model(**values)
            db.add(row)
            db.commit()
            db.refresh(row)
            return schema.model_validate(row)

    def _update(self, model, schema, record_id: str, values: dict):
        with self.session() as db:
            row = db.query(model).filter(model.id == record_id).first()
            if not row:
                return None
            for key, value in values.items():
                setattr(row, key, value)
            db.commit()
            db.refresh(row)
            return schema.model_validate(row)

    def _get(self, model, schema, record_id: str):
        with self.session() as db:
            row = db.query(model).filter(model.id == record_id).first()
            return schema.model_validate(row) if row else None

    # ---------------- Users ----------------
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self._get(Users, UserRecord, user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self.session() as db:
            row = db.query(Users).filter(Users.username == username).first()
            return UserRecord.model_validate(row) if row else None

    def create_user(self, username: str, password_hash: str, role: str) -> UserRecord:
        return self._add(Users, UserRecord, {
            "username": username, "password_hash": password_hash, "role": role})

    # ---------------- Login sessions ----------------
    def create_login_session(self, user_id, expires_at, ip_address=None, user_agent=None):
        return self._add(UserLoginSession, LoginSessionRecord, {
            "user_id": user_id,
            "expires_at": expires_at,
            "ip_address": ip_address,
            "user_agent": (user_agent or "")[:255] or None,
            "is_active": True,
        })

    def get_login_session(self, session_id: str) -> Optional[LoginSessionRecord]:
        return self._get(UserLoginSession, LoginSessionRecord, session_id)

    def deactivate_login_session(self, session_id: str) -> Optional[LoginSessionRecord]:
        return self._update(UserLoginSession, LoginSessionRecord, session_id, {
            "is_active": False, "logged_out_at": datetime.now(timezone.utc)})

    # ---------------- Activities ----------------
    def list_activities(self, include_inactive: bool = False) -> List[ActivityOut]:
        with self.session() as db:
            query = db.query(Activity)
            if not include_inactive:
                query = query.filter(Activity.is_active == True)
            rows = query.order_by(Activity.created_at.asc()).all()
            return [ActivityOut.model_validate(row) for row in rows]

    def get_activity(self, activity_id: str) -> Optional[ActivityOut]:
        return self._get(Activity, ActivityOut, activity_id)

    def create_activity(self, data: dict) -> ActivityOut:
        return self._add(Activity, ActivityOut, data)

    def update_activity(self, activity_id: str, data: dict) -> Optional[ActivityOut]:
        return self._update(Activity, ActivityOut, activity_id, data)

    def delete_activity(self, activity_id: str) -> bool:
        with self.session() as db:
            deleted = db.query(Activity).filter(Activity.id == activity_id).delete()
            db.commit()
            return deleted > 0

    # ---------------- Bookings ----------------
    def list_bookings(self) -> List[BookingOut]:
        with self.session() as db:
            rows = db.query(Booking).order_by(Booking.created_at.desc()).all()
            return [BookingOut.model_validate(row) for row in rows]

    def get_booking(self, booking_id: str) -> Optional[BookingOut]:
        return self._get(Booking, BookingOut, booking_id)

    def create_booking(self, data: dict) -> BookingOut:
        return self._add(Booking, BookingOut, data)

    def update_booking(self, booking_id: str, data: dict) -> Optional[BookingOut]:
        return self._update(Booking, BookingOut, booking_id, data)

    # ---------------- Audit log ----------------
    def create_audit_log(self, user_id: str, action: str, details: Optional[str] = None) -> AuditLogOut:
        return self._add(AuditLog, AuditLogOut, {
            "user_id": user_id, "action": action, "details": details})

    def list_audit_logs(self, limit: int = 100) -> List[AuditLogOut]:
        with self.session() as db:
            rows = (
                db.query(AuditLog)
                .order_by(AuditLog.created_at.desc())
                .limit(limit)
                .all()
            )
            return [AuditLogOut.model_validate(row) for row in rows]

    # ---------------- Reviews ----------------
    def list_reviews(self, activity_id: Optional[str] = None,
                     approved: Optional[bool] = None) -> List[ReviewOut]:
        with self.session() as db:
            query = db.query(Review)
            if activity_id is not None:
                query = query.filter(Review.activity_id == activity_id)
            if approved is not None:
                query = query.filter(Review.approved == approved)
            rows = query.order_by(Review.created_at.desc()).all()
            return [ReviewOut.model_validate(row) for row in rows]

    def get_review(self, review_id: str) -> Optional[ReviewOut]:
        return self._get(Review, ReviewOut, review_id)

    def create_review(self, data: dict) -> ReviewOut:
        return self._add(Review, ReviewOut, data)

    def update_review(self, review_id: str, data: dict) -> Optional[ReviewOut]:
        return self._update(Review, ReviewOut, review_id, data)
