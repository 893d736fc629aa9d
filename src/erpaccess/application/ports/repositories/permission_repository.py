"""Explicit permission repository port."""

from typing import Protocol

from erpaccess.domain.entities import ExplicitPermission


class PermissionRepository(Protocol):
    """Port for explicit per-user module permissions."""

    async def get_for_module(self, user_id: int, module_name: str) -> ExplicitPermission | None: ...

    async def list_by_user(self, user_id: int) -> list[ExplicitPermission]: ...

    async def upsert(self, permission: ExplicitPermission) -> ExplicitPermission: ...

    async def delete(self, user_id: int, module_name: str) -> None: ...
