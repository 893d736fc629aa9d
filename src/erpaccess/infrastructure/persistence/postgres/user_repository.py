"""PostgreSQL user repository implementation."""

from psycopg import AsyncConnection

from erpaccess.domain.entities import User
from erpaccess.domain.value_objects import UserRole, UserStatus


class PostgresUserRepository:
    """Read access to the users table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: int) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            "SELECT id, username, name, role, status FROM users WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return User(
            id=r[0],
            username=r[1],
            name=r[2],
            role=UserRole(r[3]),
            status=UserStatus(r[4]),
        )
