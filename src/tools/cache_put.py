"""MCP tool that stores a value in the shared cache.

Registers the 'cache_put' tool which validates the key and inserts or
overwrites the entry, resetting its TTL.
"""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from config import MAX_KEY_CHARS
from core.cache import BoundedTTLCache
from tools.inputs import normalize_key


def register(mcp: FastMCP, *, cache: BoundedTTLCache) -> None:
    @mcp.tool(name="cache_put")
    async def cache_put(key: str, value: Any = None) -> Dict[str, Any]:
        """Store a JSON value under a key.

        Parameters:
          - key: non-empty string key (surrounding whitespace is ignored).
          - value: any JSON value, including null.

        Returns:
          {"key": <normalized key>, "size": <entries held after the put>}.
          Writing an existing key replaces its value and restarts its TTL.
          Inserting into a full cache drops expired entries first and only
          then the least recently used one.

        Raises:
          ValidationError for an empty or over-long key.
        """
        key_clean = normalize_key(key, max_chars=MAX_KEY_CHARS)
        cache.put(key_clean, value)
        return {"key": key_clean, "size": cache.size()}
