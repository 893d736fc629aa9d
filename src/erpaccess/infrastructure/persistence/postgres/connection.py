"""PostgreSQL connection pool shared by units of work and readiness checks."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    timeout: float = 5.0,
) -> AsyncConnectionPool:
    """Create the ERP database pool, closed until PoolLifespanMiddleware opens it.

    Connections are checked before being handed out so a permission check
    never runs on a socket the server already dropped. ``timeout`` bounds the
    wait for a free connection; an exhausted pool fails the check closed.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        check=AsyncConnectionPool.check_connection,
        name="erpaccess",
        open=False,
    )
