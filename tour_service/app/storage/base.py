from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..schemas.activities_schemas import ActivityOut
from ..schemas.audit_logs_schemas import AuditLogOut
from ..schemas.bookings_schemas import BookingOut
from ..schemas.reviews_schemas import ReviewOut
from ..schemas.users_schemas import LoginSessionRecord, UserRecord


class Storage(ABC):
    """Persistence contract shared by the in-memory and SQL backends.

    Create and update methods take plain dicts keyed by snake_case field
    names and return fresh record models; callers never hold live state.
    """

    kind: str = "unknown"

    @abstractmethod
    def ping(self) -> bool: ...

    def close(self):
        pass

    # ---------------- Users ----------------
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def create_user(self, username: str, password_hash: str, role: str) -> UserRecord: ...

    # ---------------- Login sessions ----------------
    @abstractmethod
    def create_login_session(self, user_id: str, expires_at: datetime,
                             ip_address: Optional[str] = None,
                             user_agent: Optional[str] = None) -> LoginSessionRecord: ...

    @abstractmethod
    def get_login_session(self, session_id: str) -> Optional[LoginSessionRecord]: ...

    @abstractmethod
    def deactivate_login_session(self, session_id: str) -> Optional[LoginSessionRecord]: ...

    # ---------------- Activities ----------------
    @abstractmethod
    def list_activities(self, include_inactive: bool = False) -> List[ActivityOut]: ...

    @abstractmethod
    def get_activity(self, activity_id: str) -> Optional[ActivityOut]: ...

    @abstractmethod
    def create_activity(self, data: dict) -> ActivityOut: ...

    @abstractmethod
    def update_activity(self, activity_id: str, data: dict) -> Optional[ActivityOut]: ...

    @abstractmethod
    def delete_activity(self, activity_id: str) -> bool: ...

    # ---------------- Bookings ----------------
    @abstractmethod
    def list_bookings(self) -> List[BookingOut]:
        """All bookings, newest first."""

    @abstractmethod
    def get_booking(self, booking_id: str) -> Optional[BookingOut]: ...

    @abstractmethod
    def create_booking(self, data: dict) -> BookingOut: ...

    @abstractmethod
    def update_booking(self, booking_id: str, data: dict) -> Optional[BookingOut]: ...

    # ---------------- Audit log ----------------
    @abstractmethod
    def create_audit_log(self, user_id: str, action: str,
                         details: Optional[str] = None) -> AuditLogOut: ...

    @abstractmethod
    def list_audit_logs(self, limit: int = 100) -> List[AuditLogOut]: ...

    # ---------------- Reviews ----------------
    @abstractmethod
    def list_reviews(self, activity_id: Optional[str] = None,
                     approved: Optional[bool] = None) -> List[ReviewOut]:
        """Reviews newest first, optionally filtered by activity and approval."""

    @abstractmethod
    def get_review(self, review_id: str) -> Optional[ReviewOut]: ...

    @abstractmethod
    def create_review(self, data: dict) -> ReviewOut: ...

    @abstractmethod
    def update_review(self, review_id: str, data: dict) -> Optional[ReviewOut]: ...
