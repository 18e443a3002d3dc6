import logging
from typing import Optional, Tuple

from fastapi import status

from shared.core.auth import create_session_token, session_expiry, verify_password
from shared.core.config import Settings
from shared.core.policy import permissions_for
from shared.core.schemas import SessionUser
from shared.helpers.json_response_helper import error_response
from ..schemas.auth_schemas import CurrentUserOut, LoginRequest
from ..storage.base import Storage
from .audit_logs_crud import record_audit

logger = logging.getLogger(__name__)


def current_user_out(user: SessionUser) -> CurrentUserOut:
    return CurrentUserOut(
        id=user.id,
        username=user.username,
        role=user.role,
        permissions=permissions_for(user.role),
    )


def login(storage: Storage, settings: Settings, credentials: LoginRequest,
          ip_address: Optional[str] = None, user_agent: Optional[str] = None) -> Tuple[CurrentUserOut, str]:
    """Check credentials and open a login session; returns the user and the cookie token."""
    user = storage.get_user_by_username(credentials.username)
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.info("Failed login for username %r from %s", credentials.username, ip_address)
        return error_response(
            message="Invalid credentials",
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    expires_at = session_expiry(settings)
    session = storage.create_login_session(
        user.id, expires_at, ip_address=ip_address, user_agent=user_agent)
    token = create_session_token(settings, session.id, user.id, expires_at)

    record_audit(storage, user.id, f"User {user.username} logged in",
                 f"Login from IP: {ip_address}")
    logger.info("User %s (%s) logged in", user.username, user.role)

    session_user = SessionUser(id=user.id, username=user.username, role=user.role)
    return current_user_out(session_user), token


def logout(storage: Storage, user: Optional[SessionUser]):
    if user is None or not user.session_id:
        return
    storage.deactivate_login_session(user.session_id)
    logger.info("User %s logged out", user.username)
