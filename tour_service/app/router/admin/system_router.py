from typing import List

from fastapi import APIRouter, Depends, Request

from shared.core.auth import require_permission
from shared.core.config import Settings, get_settings
from shared.core.database import get_storage
from shared.core.rate_limit import rate_limit
from shared.core.schemas import SessionUser
from shared.utils.enums import Permission
from ...crud import audit_logs_crud, system_crud
from ...schemas.audit_logs_schemas import AuditLogOut
from ...schemas.system_schemas import SystemHealthOut
from ...schemas.whatsapp_schemas import WhatsAppContact
from ...util.whatsapp_service import whatsapp_service

router = APIRouter(prefix="/api/admin", tags=["admin system"],
                   dependencies=[Depends(rate_limit("admin"))])


@router.get("/audit-logs", response_model=List[AuditLogOut])
def get_audit_logs(
    storage=Depends(get_storage),
    _: SessionUser = Depends(require_permission(Permission.VIEW_AUDIT_LOG)),
):
    return audit_logs_crud.get_audit_logs(storage)


@router.get("/system-health", response_model=SystemHealthOut)
def get_system_health(
    request: Request,
    storage=Depends(get_storage),
    settings: Settings = Depends(get_settings),
    _: SessionUser = Depends(require_permission(Permission.VIEW_SYSTEM_HEALTH)),
):
    return system_crud.get_system_health(storage, settings, request.app.state.started_at)


@router.get("/whatsapp-contacts", response_model=List[WhatsAppContact])
def get_whatsapp_contacts(
    _: SessionUser = Depends(require_permission(Permission.VIEW_WHATSAPP_CONTACTS)),
):
    return whatsapp_service.get_admin_contacts()
