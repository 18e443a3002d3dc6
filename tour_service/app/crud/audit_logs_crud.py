import logging
from typing import List, Optional

from ..schemas.audit_logs_schemas import AuditLogOut
from ..storage.base import Storage

logger = logging.getLogger(__name__)

AUDIT_LOG_LIMIT = 100


def record_audit(storage: Storage, user_id: str, action: str, details: Optional[str] = None):
    try:
        return storage.create_audit_log(user_id, action, details)
    except Exception:
        # a failed audit write must not undo the change it describes
        logger.exception("Audit logging failed for action %r", action)
        return None


def get_audit_logs(storage: Storage, limit: int = AUDIT_LOG_LIMIT) -> List[AuditLogOut]:
    return storage.list_audit_logs(limit=limit)
