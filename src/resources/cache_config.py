"""Read-only MCP resources describing the shared cache.

Registers 'cache://config', a plain-text dump of the active bounds and
expiry sweep settings.
"""

from mcp.server.fastmcp import FastMCP

from config import CACHE_SWEEP_BATCH, CACHE_SWEEP_ENABLED, CACHE_SWEEP_INTERVAL, MAX_KEY_CHARS
from core.cache import BoundedTTLCache


def register_resources(mcp: FastMCP, *, cache: BoundedTTLCache) -> None:
    """
    Register read-only cache configuration resources for the MCP server.
    """

    @mcp.resource(
        "cache://config",
        mime_type="text/plain",
        description="Active cache bounds and expiry sweep settings"
    )
    def cache_config() -> str:
        lines = [
            f"max_size: {cache.max_size}",
            f"ttl_seconds: {cache.ttl_seconds}",
            f"sweep_enabled: {str(CACHE_SWEEP_ENABLED).lower()}",
            f"sweep_interval_seconds: {CACHE_SWEEP_INTERVAL}",
            f"sweep_batch: {CACHE_SWEEP_BATCH}",
            f"max_key_chars: {MAX_KEY_CHARS}",
        ]
        return "\n".join(lines) + "\n"
