from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from shared.core.auth import (
    clear_session_cookie, get_session_user, require_auth, set_session_cookie)
from shared.core.config import Settings, get_settings
from shared.core.database import get_storage
from shared.core.rate_limit import client_ip, rate_limit
from shared.core.schemas import MessageOut, SessionUser
from ..crud import auth_crud as crud
from ..schemas.auth_schemas import CurrentUserOut, LoginRequest, LoginResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse,
             dependencies=[Depends(rate_limit("auth"))])
def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    storage=Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    user, token = crud.login(
        storage, settings, credentials,
        ip_address=client_ip(request, settings),
        user_agent=request.headers.get("user-agent"),
    )
    set_session_cookie(response, settings, token)
    return LoginResponse(message="Login successful", user=user)


@router.post("/logout", response_model=MessageOut)
def logout(
    response: Response,
    storage=Depends(get_storage),
    settings: Settings = Depends(get_settings),
    current_user: Optional[SessionUser] = Depends(get_session_user),
):
    crud.logout(storage, current_user)
    clear_session_cookie(response, settings)
    return {"message": "Logout successful"}


@router.get("/user", response_model=CurrentUserOut)
def current_user(current_user: SessionUser = Depends(require_auth)):
    return crud.current_user_out(current_user)
