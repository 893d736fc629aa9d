"""Permission checker port - RBAC authorization."""

from typing import Protocol

from erpaccess.application.dto.permission_dto import PermissionDecision


class PermissionChecker(Protocol):
    """Port for deciding whether a user may perform an action on a resource."""

    async def check(
        self,
        user_id: int,
        resource: str,
        action: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> PermissionDecision: ...
