"""Role permission entity for RBAC defaults."""

from dataclasses import dataclass
from datetime import datetime

from erpaccess.domain.value_objects import UserRole


@dataclass
class RolePermission:
    """Role may perform action on resource unless overridden per user."""

    role: UserRole
    resource: str
    action: str
    id: int | None = None
    created_at: datetime | None = None
