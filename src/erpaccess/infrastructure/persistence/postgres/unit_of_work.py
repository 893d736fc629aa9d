"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from erpaccess.application.ports import UnitOfWorkFactory
from erpaccess.infrastructure.persistence.postgres.audit_log_repository import (
    PostgresAuditLogRepository,
)
from erpaccess.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from erpaccess.infrastructure.persistence.postgres.role_permission_repository import (
    PostgresRolePermissionRepository,
)
from erpaccess.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """One pooled connection and one transaction shared by all repositories.

    Leaving the block commits; an exception rolls back and propagates.
    """

    users: PostgresUserRepository
    permissions: PostgresPermissionRepository
    role_permissions: PostgresRolePermissionRepository
    audit_logs: PostgresAuditLogRepository

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._stack = AsyncExitStack()
        self._conn: AsyncConnection | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn = await self._stack.enter_async_context(self._pool.connection())
        self.users = PostgresUserRepository(self._conn)
        self.permissions = PostgresPermissionRepository(self._conn)
        self.role_permissions = PostgresRolePermissionRepository(self._conn)
        self.audit_logs = PostgresAuditLogRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            self._conn = None
            await self._stack.aclose()

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> UnitOfWorkFactory:
    """Create UnitOfWork factory (async context manager) bound to the pool."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with PostgresUnitOfWork(pool) as uow:
            yield uow

    return factory
