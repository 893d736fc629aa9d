"""PostgreSQL explicit permission repository implementation."""

from psycopg import AsyncConnection

from erpaccess.domain.entities import ExplicitPermission

_COLUMNS = "id, user_id, module_name, access_granted, created_at, updated_at"


def _row_to_permission(r: tuple) -> ExplicitPermission:
    return ExplicitPermission(
        id=r[0],
        user_id=r[1],
        module_name=r[2],
        access_granted=r[3],
        created_at=r[4],
        updated_at=r[5],
    )


class PostgresPermissionRepository:
    """Permission repository implementation over user_permissions."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_for_module(self, user_id: int, module_name: str) -> ExplicitPermission | None:
        """Get permission of user on module."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_permissions WHERE user_id = %s AND module_name = %s",
            (user_id, str(module_name)),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def list_by_user(self, user_id: int) -> list[ExplicitPermission]:
        """List permissions of user."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_permissions WHERE user_id = %s ORDER BY id",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def upsert(self, permission: ExplicitPermission) -> ExplicitPermission:
        """Insert or overwrite the (user, module) row; the last write wins.

        An existing row keeps its id and created_at.
        """
        cur = await self._conn.execute(
            "INSERT INTO user_permissions (user_id, module_name, access_granted, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (user_id, module_name) DO UPDATE "
            "SET access_granted = EXCLUDED.access_granted, updated_at = EXCLUDED.updated_at "
            f"RETURNING {_COLUMNS}",
            (
                permission.user_id,
                str(permission.module_name),
                permission.access_granted,
                permission.created_at,
                permission.updated_at,
            ),
        )
        r = await cur.fetchone()
        return _row_to_permission(r)

    async def delete(self, user_id: int, module_name: str) -> None:
        """Delete permission of user on module."""
        await self._conn.execute(
            "DELETE FROM user_permissions WHERE user_id = %s AND module_name = %s",
            (user_id, str(module_name)),
        )
