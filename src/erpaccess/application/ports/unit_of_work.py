"""Unit of Work port - transactional boundary."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

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


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def users(self) -> UserRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def role_permissions(self) -> RolePermissionRepository: ...

    @property
    def audit_logs(self) -> AuditLogRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Opens a UnitOfWork: commits on clean exit, rolls back when the block raises."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
