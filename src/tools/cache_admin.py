"""MCP tools for inspecting and resetting the shared cache.

Registers 'cache_size', 'cache_stats' and 'cache_clear'.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from core.cache import BoundedTTLCache


def register(mcp: FastMCP, *, cache: BoundedTTLCache) -> None:
    @mcp.tool(name="cache_size")
    async def cache_size() -> int:
        """Number of entries held, including expired ones not yet dropped."""
        return cache.size()

    @mcp.tool(name="cache_stats")
    async def cache_stats() -> Dict[str, Any]:
        """Hit/miss/eviction/expiration counters plus size, bounds and hit_rate."""
        stats = cache.stats()
        out = asdict(stats)
        out["hit_rate"] = stats.hit_rate
        return out

    @mcp.tool(name="cache_clear")
    async def cache_clear() -> Dict[str, Any]:
        """Drop every entry. Counters are kept. Returns {"cleared": <count>}."""
        return {"cleared": cache.clear()}
