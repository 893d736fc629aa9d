"""User entity - read-only view of the user-management record."""

from dataclasses import dataclass

from erpaccess.domain.value_objects import UserRole, UserStatus


@dataclass
class User:
    """ERP user as seen by the permission core."""

    id: int
    username: str
    role: UserRole
    status: UserStatus
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.username

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
