"""Pool lifespan middleware - opens pool on startup, closes on shutdown."""

from typing import Any

import structlog
from psycopg_pool import AsyncConnectionPool

logger = structlog.get_logger()


class PoolLifespanMiddleware:
    """Middleware that opens the connection pool on startup and closes on shutdown."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        """Open pool when ASGI server starts."""
        await self._pool.open()
        logger.info("db_pool_opened", min_size=self._pool.min_size, max_size=self._pool.max_size)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        """Close pool when ASGI server shuts down."""
        await self._pool.close()
        logger.info("db_pool_closed")
