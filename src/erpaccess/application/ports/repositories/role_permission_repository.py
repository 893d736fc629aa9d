"""Role permission repository port."""

from typing import Protocol

from erpaccess.domain.entities import RolePermission


class RolePermissionRepository(Protocol):
    """Port for role default entitlements."""

    async def get(self, role: str, resource: str, action: str) -> RolePermission | None: ...

    async def list_by_role(self, role: str) -> list[RolePermission]: ...

    async def add_if_missing(self, permission: RolePermission) -> bool: ...
