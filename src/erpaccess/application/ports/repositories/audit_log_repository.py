"""Audit log repository port."""

from datetime import datetime
from typing import Protocol

from erpaccess.application.dto.analytics_dto import ResourceAccessCount
from erpaccess.domain.entities import AccessCheckLogEntry, PermissionChangeLogEntry


class AuditLogRepository(Protocol):
    """Port for the append-only access and permission-change logs."""

    async def ensure_schema(self) -> None: ...

    async def add_check(self, entry: AccessCheckLogEntry) -> None: ...

    async def add_change(self, entry: PermissionChangeLogEntry) -> None: ...

    async def list_checks_by_user(self, user_id: int, limit: int) -> list[AccessCheckLogEntry]: ...

    async def list_changes(
        self, target_user_id: int | None, limit: int
    ) -> list[PermissionChangeLogEntry]: ...

    async def count_checks(self, since: datetime, *, denied_only: bool = False) -> int: ...

    async def count_unique_users(self, since: datetime) -> int: ...

    async def most_accessed_resources(
        self, since: datetime, limit: int
    ) -> list[ResourceAccessCount]: ...

    async def recent_denials(self, since: datetime, limit: int) -> list[AccessCheckLogEntry]: ...
