"""Server bootstrap for the TTL cache MCP service.

Creates the shared cache and the FastMCP instance, registers tools and
resources, runs the expiry sweeper for the server's lifetime, and starts
the MCP server (stdio transport).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP

from config import (
    CACHE_MAX_SIZE,
    CACHE_SWEEP_BATCH,
    CACHE_SWEEP_ENABLED,
    CACHE_SWEEP_INTERVAL,
    CACHE_TTL_SECONDS,
    LOG_LEVEL,
)
from core.cache import BoundedTTLCache
from core.log import configure_logging
from core.sweeper import ExpirySweeper

from tools.cache_admin import register as register_cache_admin
from tools.cache_get import register as register_cache_get
from tools.cache_put import register as register_cache_put
from tools.cache_remove import register as register_cache_remove

from resources.cache_config import register_resources

configure_logging(LOG_LEVEL)

cache = BoundedTTLCache(max_size=CACHE_MAX_SIZE, ttl_seconds=CACHE_TTL_SECONDS)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    if not CACHE_SWEEP_ENABLED:
        yield
        return

    sweeper = ExpirySweeper(cache, interval_seconds=CACHE_SWEEP_INTERVAL, max_batch=CACHE_SWEEP_BATCH)
    sweeper.start()
    try:
        yield
    finally:
        await sweeper.stop()


mcp = FastMCP("ttl-cache-mcp", lifespan=lifespan)


def register_tools() -> None:
    register_cache_put(mcp, cache=cache)
    register_cache_get(mcp, cache=cache)
    register_cache_remove(mcp, cache=cache)
    register_cache_admin(mcp, cache=cache)


def register_all() -> None:
    register_tools()
    register_resources(mcp, cache=cache)


register_all()


def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
