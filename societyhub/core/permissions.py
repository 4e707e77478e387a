# ================================
# ROLES & PERMISSIONS (core/permissions.py)
# ================================

from societyhub.models.user import UserRole

ROLES = [role.value for role in UserRole]

# Granular grants a non-admin user can hold on top of their role
PERMISSIONS = [
    "member_management",
    "announcements",
    "reports",
]

def is_valid_role(role: str) -> bool:
    return role in ROLES

def invalid_permissions(permissions: list) -> list:
    """Return the entries that are not known permission names"""
    return [p for p in permissions if p not in PERMISSIONS]
