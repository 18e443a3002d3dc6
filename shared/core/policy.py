"""Role based authorization policy.

Every role check in the service goes through :func:`can`, both in the route
guards and in the permission list handed to the browser for its own menus.
"""
from typing import Dict, FrozenSet, List, Optional, Union

from shared.utils.enums import Permission, UserRole

ADMIN_PERMISSIONS: FrozenSet[Permission] = frozenset({
    Permission.MANAGE_BOOKINGS,
    Permission.MANAGE_ACTIVITIES,
    Permission.MANAGE_REVIEWS,
    Permission.VIEW_ANALYTICS,
    Permission.VIEW_PRICE_COMPARISON,
    Permission.VIEW_WHATSAPP_CONTACTS,
})

# superadmin is a strict superset of admin
SUPER_ADMIN_PERMISSIONS: FrozenSet[Permission] = ADMIN_PERMISSIONS | frozenset({
    Permission.VIEW_CEO_DASHBOARD,
    Permission.VIEW_AUDIT_LOG,
    Permission.VIEW_SYSTEM_HEALTH,
    Permission.EDIT_COMPETITOR_PRICE,
})

ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[Permission]] = {
    UserRole.ADMIN: ADMIN_PERMISSIONS,
    UserRole.SUPER_ADMIN: SUPER_ADMIN_PERMISSIONS,
}


def _as_role(role: Union[str, UserRole, None]) -> Optional[UserRole]:
    if role is None:
        return None
    try:
        return UserRole(role)
    except ValueError:
        return None


def can(role: Union[str, UserRole, None], permission: Permission) -> bool:
    user_role = _as_role(role)
    if user_role is None:
        return False
    return permission in ROLE_PERMISSIONS[user_role]


def permissions_for(role: Union[str, UserRole, None]) -> List[str]:
    user_role = _as_role(role)
    if user_role is None:
        return []
    return sorted(p.value for p in ROLE_PERMISSIONS[user_role])
