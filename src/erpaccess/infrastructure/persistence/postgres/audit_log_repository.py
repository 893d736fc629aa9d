"""PostgreSQL audit log repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection

from erpaccess.application.dto.analytics_dto import ResourceAccessCount
from erpaccess.domain.entities import AccessCheckLogEntry, PermissionChangeLogEntry
from erpaccess.domain.value_objects import ChangeAction

# Serializes concurrent bootstraps; CREATE ... IF NOT EXISTS alone can race on pg_type.
_SCHEMA_LOCK_KEY = 0x45525041

_SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS access_logs (
        id SERIAL PRIMARY KEY,
        user_id INTEGER NOT NULL,
        resource VARCHAR(100) NOT NULL,
        action VARCHAR(50) NOT NULL,
        granted BOOLEAN NOT NULL,
        reason TEXT NOT NULL,
        ip_address TEXT,
        user_agent TEXT,
        response_time INTEGER,
        error TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_access_logs_user_id ON access_logs (user_id)",
    "CREATE INDEX IF NOT EXISTS idx_access_logs_created_at ON access_logs (created_at)",
    "CREATE INDEX IF NOT EXISTS idx_access_logs_resource ON access_logs (resource)",
    """
    CREATE TABLE IF NOT EXISTS permission_changes (
        id SERIAL PRIMARY KEY,
        admin_user_id INTEGER NOT NULL,
        target_user_id INTEGER NOT NULL,
        module_name VARCHAR(100) NOT NULL,
        access_granted BOOLEAN NOT NULL,
        action VARCHAR(20) NOT NULL,
        previous_value BOOLEAN,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_permission_changes_target_user "
    "ON permission_changes (target_user_id)",
    "CREATE INDEX IF NOT EXISTS idx_permission_changes_created_at "
    "ON permission_changes (created_at)",
)

_CHECK_COLUMNS = (
    "al.id, al.user_id, al.resource, al.action, al.granted, al.reason, "
    "al.ip_address, al.user_agent, al.response_time, al.error, al.created_at"
)


def _row_to_check(r: tuple, user_name: str | None = None) -> AccessCheckLogEntry:
    return AccessCheckLogEntry(
        id=r[0],
        user_id=r[1],
        resource=r[2],
        action=r[3],
        granted=r[4],
        reason=r[5],
        ip_address=r[6],
        user_agent=r[7],
        response_time_ms=r[8] or 0,
        error=r[9],
        created_at=r[10],
        user_name=user_name,
    )


class PostgresAuditLogRepository:
    """Audit log repository over access_logs and permission_changes."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def ensure_schema(self) -> None:
        """Create audit tables and indexes if they do not exist."""
        await self._conn.execute("SELECT pg_advisory_xact_lock(%s)", (_SCHEMA_LOCK_KEY,))
        for statement in _SCHEMA_STATEMENTS:
            await self._conn.execute(statement)

    async def add_check(self, entry: AccessCheckLogEntry) -> None:
        """Append access check entry."""
        await self._conn.execute(
            "INSERT INTO access_logs (user_id, resource, action, granted, reason, "
            "ip_address, user_agent, response_time, error, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.user_id,
                entry.resource,
                entry.action,
                entry.granted,
                entry.reason,
                entry.ip_address,
                entry.user_agent,
                entry.response_time_ms,
                entry.error,
                entry.created_at,
            ),
        )

    async def add_change(self, entry: PermissionChangeLogEntry) -> None:
        """Append permission change entry."""
        await self._conn.execute(
            "INSERT INTO permission_changes (admin_user_id, target_user_id, module_name, "
            "access_granted, action, previous_value, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                entry.admin_user_id,
                entry.target_user_id,
                entry.module_name,
                entry.access_granted,
                str(entry.action),
                entry.previous_value,
                entry.created_at,
            ),
        )

    async def list_checks_by_user(self, user_id: int, limit: int) -> list[AccessCheckLogEntry]:
        """Checks of user, newest first."""
        cur = await self._conn.execute(
            f"SELECT {_CHECK_COLUMNS} FROM access_logs al "
            "WHERE al.user_id = %s ORDER BY al.created_at DESC, al.id DESC LIMIT %s",
            (user_id, limit),
        )
        rows = await cur.fetchall()
        return [_row_to_check(r) for r in rows]

    async def list_changes(
        self, target_user_id: int | None, limit: int
    ) -> list[PermissionChangeLogEntry]:
        """Changes newest first with admin and target display names."""
        query = (
            "SELECT pc.id, pc.admin_user_id, pc.target_user_id, pc.module_name, "
            "pc.access_granted, pc.action, pc.previous_value, pc.created_at, "
            "COALESCE(au.name, au.username), COALESCE(tu.name, tu.username) "
            "FROM permission_changes pc "
            "LEFT JOIN users au ON pc.admin_user_id = au.id "
            "LEFT JOIN users tu ON pc.target_user_id = tu.id "
        )
        params: list = []
        if target_user_id is not None:
            query += "WHERE pc.target_user_id = %s "
            params.append(target_user_id)
        query += "ORDER BY pc.created_at DESC, pc.id DESC LIMIT %s"
        params.append(limit)

        cur = await self._conn.execute(query, params)
        rows = await cur.fetchall()
        return [
            PermissionChangeLogEntry(
                id=r[0],
                admin_user_id=r[1],
                target_user_id=r[2],
                module_name=r[3],
                access_granted=r[4],
                action=ChangeAction(r[5]),
                previous_value=r[6],
                created_at=r[7],
                admin_name=r[8],
                target_user_name=r[9],
            )
            for r in rows
        ]

    async def count_checks(self, since: datetime, *, denied_only: bool = False) -> int:
        """Number of checks since a point in time."""
        query = "SELECT COUNT(*) FROM access_logs WHERE created_at >= %s"
        if denied_only:
            query += " AND granted = false"
        cur = await self._conn.execute(query, (since,))
        r = await cur.fetchone()
        return r[0] if r else 0

    async def count_unique_users(self, since: datetime) -> int:
        """Number of distinct users checked since a point in time."""
        cur = await self._conn.execute(
            "SELECT COUNT(DISTINCT user_id) FROM access_logs WHERE created_at >= %s",
            (since,),
        )
        r = await cur.fetchone()
        return r[0] if r else 0

    async def most_accessed_resources(
        self, since: datetime, limit: int
    ) -> list[ResourceAccessCount]:
        """Resources by check count, descending."""
        cur = await self._conn.execute(
            "SELECT resource, COUNT(*) AS access_count FROM access_logs "
            "WHERE created_at >= %s GROUP BY resource "
            "ORDER BY access_count DESC, resource LIMIT %s",
            (since, limit),
        )
        rows = await cur.fetchall()
        return [ResourceAccessCount(resource=r[0], access_count=r[1]) for r in rows]

    async def recent_denials(self, since: datetime, limit: int) -> list[AccessCheckLogEntry]:
        """Denied checks newest first with the user's display name."""
        cur = await self._conn.execute(
            f"SELECT {_CHECK_COLUMNS}, COALESCE(u.name, u.username) FROM access_logs al "
            "LEFT JOIN users u ON al.user_id = u.id "
            "WHERE al.granted = false AND al.created_at >= %s "
            "ORDER BY al.created_at DESC, al.id DESC LIMIT %s",
            (since, limit),
        )
        rows = await cur.fetchall()
        return [_row_to_check(r, user_name=r[11]) for r in rows]
