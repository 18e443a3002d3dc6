import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request, Response, status
from jose import JWTError, jwt
from passlib.context import CryptContext

from shared.core.config import Settings, get_settings
from shared.core.database import get_storage
from shared.core.policy import can
from shared.core.schemas import SessionUser
from shared.helpers.json_response_helper import error_response
from shared.utils.enums import Permission

logger = logging.getLogger(__name__)

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    if rounds:
        return bcrypt_context.copy(bcrypt__default_rounds=rounds).hash(password)
    return bcrypt_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt_context.verify(password, password_hash)
    except ValueError:
        # malformed or legacy hash
        return False


def session_expiry(settings: Settings) -> datetime:
    return datetime.now(timezone.utc) + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)


def create_session_token(settings: Settings, session_id: str, user_id: str, expires_at: datetime) -> str:
    payload = {
        "sid": session_id,
        "sub": user_id,
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.session_secret,
                      algorithm=settings.SESSION_ALGORITHM)


def decode_session_token(settings: Settings, token: str) -> Optional[dict]:
    """Verify and decode a session cookie, None when tampered or expired."""
    try:
        return jwt.decode(token, settings.session_secret,
                          algorithms=[settings.SESSION_ALGORITHM])
    except JWTError:
        return None


def set_session_cookie(response: Response, settings: Settings, token: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings):
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def get_session_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    storage=Depends(get_storage),
) -> Optional[SessionUser]:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None

    payload = decode_session_token(settings, token)
    if not payload or not payload.get("sid"):
        return None

    # the session row is the source of truth, logout revokes it
    session = storage.get_login_session(payload["sid"])
    if not session or not session.is_active:
        return None
    if session.expires_at and session.expires_at <= datetime.now(timezone.utc):
        return None

    user = storage.get_user(session.user_id)
    if not user:
        return None

    session_user = SessionUser(
        id=user.id, username=user.username, role=user.role, session_id=session.id)
    request.state.session_user = session_user
    return session_user


def require_auth(current_user: Optional[SessionUser] = Depends(get_session_user)) -> SessionUser:
    if current_user is None:
        return error_response(
            message="Not authenticated",
            error="Authentication Required",
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return current_user


def require_permission(permission: Permission):
    """Route guard: 401 without a session, 403 when the role lacks `permission`."""

    def guard(
        response: Response,
        current_user: Optional[SessionUser] = Depends(get_session_user),
    ) -> SessionUser:
        if current_user is None:
            return error_response(
                message="Please log in to access admin features",
                error="Authentication Required",
                http_status=status.HTTP_401_UNAUTHORIZED
            )

        if not can(current_user.role, permission):
            logger.info("User %s (%s) denied %s",
                        current_user.username, current_user.role, permission.value)
            return error_response(
                message="Access forbidden for this role",
                error="Insufficient Privileges",
                http_status=status.HTTP_403_FORBIDDEN
            )

        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, private"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return current_user

    return guard
