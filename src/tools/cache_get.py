"""MCP tool that looks up a value in the shared cache."""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from config import MAX_KEY_CHARS
from core.cache import MISS, BoundedTTLCache
from tools.inputs import normalize_key


def register(mcp: FastMCP, *, cache: BoundedTTLCache) -> None:
    @mcp.tool(name="cache_get")
    async def cache_get(key: str) -> Dict[str, Any]:
        """Look up a key.

        Returns {"key", "hit", "value"}. On a miss (absent or expired key)
        hit is false and value is null; check hit to tell a miss apart from
        a stored null. A hit marks the key as most recently used.
        """
        key_clean = normalize_key(key, max_chars=MAX_KEY_CHARS)
        value = cache.get(key_clean)
        if value is MISS:
            return {"key": key_clean, "hit": False, "value": None}
        return {"key": key_clean, "hit": True, "value": value}
