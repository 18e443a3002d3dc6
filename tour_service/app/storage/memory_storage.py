import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Type

from pydantic import BaseModel

from shared.models.users import new_id
from .base import Storage
from ..schemas.activities_schemas import ActivityOut
from ..schemas.audit_logs_schemas import AuditLogOut
from ..schemas.bookings_schemas import BookingOut
from ..schemas.reviews_schemas import ReviewOut
from ..schemas.users_schemas import LoginSessionRecord, UserRecord


def _now():
    return datetime.now(timezone.utc)


def _newest_first(records):
    # reversed first so records created in the same instant keep newest first
    return sorted(reversed(list(records)), key=lambda r: r.created_at, reverse=True)


class MemoryStorage(Storage):
    """Process local storage; everything is lost on restart."""

    kind = "memory"

    def __init__(self):
        self._lock = threading.RLock()
        self.users: Dict[str, UserRecord] = {}
        self.sessions: Dict[str, LoginSessionRecord] = {}
        self.activities: Dict[str, ActivityOut] = {}
        self.bookings: Dict[str, BookingOut] = {}
        self.audit_logs: Dict[str, AuditLogOut] = {}
        self.reviews: Dict[str, ReviewOut] = {}

    def ping(self) -> bool:
        return True

    # ---------------- helpers ----------------
    def _insert(self, table: dict, model: Type[BaseModel], data: dict, timestamps=True):
        now = _now()
        values = dict(data, id=new_id(), created_at=now)
        if timestamps:
            values["updated_at"] = now
        record = model.model_validate(values)
        with self._lock:
            table[record.id] = record
        return record.model_copy(deep=True)

    def _update(self, table: dict, record_id: str, data: dict):
        with self._lock:
            current = table.get(record_id)
            if current is None:
                return None
            values = current.model_dump()
            values.update(data)
            if "updated_at" in values:
                values["updated_at"] = _now()
            record = type(current).model_validate(values)
            table[record_id] = record
        return record.model_copy(deep=True)

    def _get(self, table: dict, record_id: str):
        record = table.get(record_id)
        return record.model_copy(deep=True) if record else None

    # ---------------- Users ----------------
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self._get(self.users, user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None

    def create_user(self, username: str, password_hash: str, role: str) -> UserRecord:
        return self._insert(self.users, UserRecord, {
            "username": username, "password_hash": password_hash, "role": role})

    # ---------------- Login sessions ----------------
    def create_login_session(self, user_id, expires_at, ip_address=None, user_agent=None):
        return self._insert(self.sessions, LoginSessionRecord, {
            "user_id": user_id,
            "expires_at": expires_at,
            "ip_address": ip_address,
            "user_agent": user_agent,
            "is_active": True,
        }, timestamps=False)

    def get_login_session(self, session_id: str) -> Optional[LoginSessionRecord]:
        return self._get(self.sessions, session_id)

    def deactivate_login_session(self, session_id: str) -> Optional[LoginSessionRecord]:
        return self._update(self.sessions, session_id, {
            "is_active": False, "logged_out_at": _now()})

    # ---------------- Activities ----------------
    def list_activities(self, include_inactive: bool = False) -> List[ActivityOut]:
        return [a.model_copy(deep=True) for a in self.activities.values()
                if include_inactive or a.is_active]

    def get_activity(self, activity_id: str) -> Optional[ActivityOut]:
        return self._get(self.activities, activity_id)

    def create_activity(self, data: dict) -> ActivityOut:
        return self._insert(self.activities, ActivityOut, data)

    def update_activity(self, activity_id: str, data: dict) -> Optional[ActivityOut]:
        return self._update(self.activities, activity_id, data)

    def delete_activity(self, activity_id: str) -> bool:
        with self._lock:
            return self.activities.pop(activity_id, None) is not None

    # ---------------- Bookings ----------------
    def list_bookings(self) -> List[BookingOut]:
        return [b.model_copy(deep=True) for b in _newest_first(self.bookings.values())]

    def get_booking(self, booking_id: str) -> Optional[BookingOut]:
        return self._get(self.bookings, booking_id)

    def create_booking(self, data: dict) -> BookingOut:
        return self._insert(self.bookings, BookingOut, data)

    def update_booking(self, booking_id: str, data: dict) -> Optional[BookingOut]:
        return self._update(self.bookings, booking_id, data)

    # ---------------- Audit log ----------------
    def create_audit_log(self, user_id: str, action: str, details: Optional[str] = None) -> AuditLogOut:
        return self._insert(self.audit_logs, AuditLogOut, {
            "user_id": user_id, "action": action, "details": details}, timestamps=False)

    def list_audit_logs(self, limit: int = 100) -> List[AuditLogOut]:
        return [log.model_copy() for log in _newest_first(self.audit_logs.values())[:limit]]

    # ---------------- Reviews ----------------
    def list_reviews(self, activity_id: Optional[str] = None,
                     approved: Optional[bool] = None) -> List[ReviewOut]:
        reviews = [
            r for r in self.reviews.values()
            if (activity_id is None or r.activity_id == activity_id)
            and (approved is None or r.approved == approved)
        ]
        return [r.model_copy() for r in _newest_first(reviews)]

    def get_review(self, review_id: str) -> Optional[ReviewOut]:
        return self._get(self.reviews, review_id)

    def create_review(self, data: dict) -> ReviewOut:
        return self._insert(self.reviews, ReviewOut, data)

    def update_review(self, review_id: str, data: dict) -> Optional[ReviewOut]:
        return self._update(self.reviews, review_id, data)
