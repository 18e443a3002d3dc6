from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "superadmin"


class Permission(str, Enum):
    MANAGE_BOOKINGS = "manage_bookings"
    MANAGE_ACTIVITIES = "manage_activities"
    MANAGE_REVIEWS = "manage_reviews"
    VIEW_ANALYTICS = "view_analytics"
    VIEW_PRICE_COMPARISON = "view_price_comparison"
    VIEW_WHATSAPP_CONTACTS = "view_whatsapp_contacts"
    # superadmin only
    VIEW_CEO_DASHBOARD = "view_ceo_dashboard"
    VIEW_AUDIT_LOG = "view_audit_log"
    VIEW_SYSTEM_HEALTH = "view_system_health"
    EDIT_COMPETITOR_PRICE = "edit_competitor_price"
