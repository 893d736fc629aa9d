"""PostgreSQL role permission repository implementation."""

from psycopg import AsyncConnection

from erpaccess.domain.entities import RolePermission
from erpaccess.domain.value_objects import UserRole


def _row_to_role_permission(r: tuple) -> RolePermission:
    # resource and action are kept as stored, they may lie outside the catalogs
    return RolePermission(
        id=r[0],
        role=UserRole(r[1]),
        resource=r[2],
        action=r[3],
        created_at=r[4],
    )


class PostgresRolePermissionRepository:
    """Role permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, role: str, resource: str, action: str) -> RolePermission | None:
        """Get role permission for (role, resource, action)."""
        cur = await self._conn.execute(
            "SELECT id, role, resource, action, created_at FROM role_permissions "
            "WHERE role = %s AND resource = %s AND action = %s",
            (str(role), str(resource), str(action)),
        )
        r = await cur.fetchone()
        return _row_to_role_permission(r) if r else None

    async def list_by_role(self, role: str) -> list[RolePermission]:
        """List permissions of role."""
        cur = await self._conn.execute(
            "SELECT id, role, resource, action, created_at FROM role_permissions "
            "WHERE role = %s ORDER BY id",
            (str(role),),
        )
        rows = await cur.fetchall()
        return [_row_to_role_permission(r) for r in rows]

    async def add_if_missing(self, permission: RolePermission) -> bool:
        """Insert role permission; return False if it already existed."""
        cur = await self._conn.execute(
            "INSERT INTO role_permissions (role, resource, action) VALUES (%s, %s, %s) "
            "ON CONFLICT (role, resource, action) DO NOTHING",
            (str(permission.role), str(permission.resource), str(permission.action)),
        )
        return cur.rowcount == 1
