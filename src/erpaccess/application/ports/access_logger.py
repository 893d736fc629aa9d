"""Access logger port - best-effort audit trail."""

from typing import Protocol

from erpaccess.application.dto.analytics_dto import SecurityAnalytics
from erpaccess.domain.entities import AccessCheckLogEntry, PermissionChangeLogEntry


class AccessLogger(Protocol):
    """Port for recording and querying permission checks and changes.

    Write methods never raise; read methods return empty results when the
    store is unavailable.
    """

    async def log_permission_check(self, entry: AccessCheckLogEntry) -> None: ...

    async def log_permission_change(self, entry: PermissionChangeLogEntry) -> None: ...

    async def get_user_access_logs(
        self, user_id: int, limit: int = 50
    ) -> list[AccessCheckLogEntry]: ...

    async def get_permission_change_history(
        self, target_user_id: int | None = None, limit: int = 100
    ) -> list[PermissionChangeLogEntry]: ...

    async def get_security_analytics(self, days: int = 30) -> SecurityAnalytics: ...
