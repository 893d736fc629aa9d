"""Repository ports."""

from erpaccess.application.ports.repositories.audit_log_repository import (
    AuditLogRepository,
)
from erpaccess.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from erpaccess.application.ports.repositories.role_permission_repository import (
    RolePermissionRepository,
)
from erpaccess.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "AuditLogRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "UserRepository",
]
