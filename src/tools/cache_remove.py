"""MCP tool that deletes an entry from the shared cache."""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from config import MAX_KEY_CHARS
from core.cache import BoundedTTLCache
from tools.inputs import normalize_key


def register(mcp: FastMCP, *, cache: BoundedTTLCache) -> None:
    @mcp.tool(name="cache_remove")
    async def cache_remove(key: str) -> Dict[str, Any]:
        """Remove a key, live or expired. Returns {"key", "removed"}."""
        key_clean = normalize_key(key, max_chars=MAX_KEY_CHARS)
        return {"key": key_clean, "removed": cache.remove(key_clean)}
