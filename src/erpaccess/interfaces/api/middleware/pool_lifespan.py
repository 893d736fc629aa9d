"""Pool lifespan middleware - opens pool and bootstraps schema on startup."""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from psycopg_pool import AsyncConnectionPool


class PoolLifespanMiddleware:
    """Opens the connection pool on startup, runs startup hooks, closes on shutdown."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        startup_hooks: Sequence[Callable[[], Awaitable[None]]] = (),
    ) -> None:
        self._pool = pool
        self._startup_hooks = list(startup_hooks)

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool, then run hooks such as the audit schema bootstrap."""
        await self._pool.open()
        for hook in self._startup_hooks:
            await hook()

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pool when ASGI server shuts down."""
        await self._pool.close()
