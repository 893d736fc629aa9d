"""Domain entities."""

from erpaccess.domain.entities.audit import AccessCheckLogEntry, PermissionChangeLogEntry
from erpaccess.domain.entities.permission import ExplicitPermission
from erpaccess.domain.entities.role_permission import RolePermission
from erpaccess.domain.entities.user import User

__all__ = [
    "AccessCheckLogEntry",
    "ExplicitPermission",
    "PermissionChangeLogEntry",
    "RolePermission",
    "User",
]
