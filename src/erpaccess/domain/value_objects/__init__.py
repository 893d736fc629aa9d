"""Domain value objects."""

from erpaccess.domain.value_objects.change_action import ChangeAction
from erpaccess.domain.value_objects.module import Module
from erpaccess.domain.value_objects.permission_action import PermissionAction
from erpaccess.domain.value_objects.user_role import UserRole, UserStatus

__all__ = [
    "ChangeAction",
    "Module",
    "PermissionAction",
    "UserRole",
    "UserStatus",
]
