import pytest

from core.cache import BoundedTTLCache
from core.errors import ValidationError
from resources import cache_config
from tools import cache_admin, cache_get, cache_put, cache_remove


@pytest.fixture
def registered(dummy_mcp):
    cache = BoundedTTLCache(max_size=2, ttl_seconds=10.0)
    for mod in (cache_put, cache_get, cache_remove, cache_admin):
        mod.register(dummy_mcp, cache=cache)
    return dummy_mcp.tools, cache


@pytest.mark.asyncio
async def test_cache_put_and_get_roundtrip(registered, clock):
    tools, cache = registered

    out = await tools["cache_put"](key=" greeting ", value={"text": "hi"})
    assert out == {"key": "greeting", "size": 1}

    got = await tools["cache_get"](key="greeting")
    assert got == {"key": "greeting", "hit": True, "value": {"text": "hi"}}


@pytest.mark.asyncio
async def test_cache_get_distinguishes_miss_from_stored_null(registered, clock):
    tools, cache = registered

    await tools["cache_put"](key="nothing", value=None)

    assert await tools["cache_get"](key="nothing") == {"key": "nothing", "hit": True, "value": None}
    assert await tools["cache_get"](key="absent") == {"key": "absent", "hit": False, "value": None}


@pytest.mark.asyncio
async def test_cache_get_reports_expired_as_miss(registered, clock):
    tools, cache = registered

    await tools["cache_put"](key="k", value=1)
    clock.now = 10.0

    assert (await tools["cache_get"](key="k"))["hit"] is False


@pytest.mark.asyncio
async def test_cache_tools_validate_key(registered):
    tools, cache = registered

    for name in ("cache_put", "cache_get", "cache_remove"):
        with pytest.raises(ValidationError):
            await tools[name](key="   ")


@pytest.mark.asyncio
async def test_cache_put_rejects_over_long_key(monkeypatch, registered):
    tools, cache = registered
    monkeypatch.setattr(cache_put, "MAX_KEY_CHARS", 4)

    with pytest.raises(ValidationError):
        await tools["cache_put"](key="abcde", value=1)
    assert cache.size() == 0


@pytest.mark.asyncio
async def test_cache_remove_tool(registered, clock):
    tools, cache = registered

    await tools["cache_put"](key="k", value=1)

    assert await tools["cache_remove"](key="k") == {"key": "k", "removed": True}
    assert await tools["cache_remove"](key="k") == {"key": "k", "removed": False}


@pytest.mark.asyncio
async def test_cache_admin_tools(registered, clock):
    tools, cache = registered

    await tools["cache_put"](key="a", value=1)
    await tools["cache_put"](key="b", value=2)
    await tools["cache_put"](key="c", value=3)
    await tools["cache_get"](key="c")
    await tools["cache_get"](key="a")

    assert await tools["cache_size"]() == 2

    stats = await tools["cache_stats"]()
    assert stats == {
        "hits": 1,
        "misses": 1,
        "evictions": 1,
        "expirations": 0,
        "size": 2,
        "max_size": 2,
        "ttl_seconds": 10.0,
        "hit_rate": 0.5,
    }

    assert await tools["cache_clear"]() == {"cleared": 2}
    assert await tools["cache_size"]() == 0


def test_cache_config_resource(dummy_mcp):
    cache = BoundedTTLCache(max_size=3, ttl_seconds=42.0)
    cache_config.register_resources(dummy_mcp, cache=cache)

    text = dummy_mcp.resources["cache://config"]()

    assert "max_size: 3\n" in text
    assert "ttl_seconds: 42.0\n" in text
    assert "sweep_batch:" in text


class FakeClearingCache:
    def __init__(self, held: int) -> None:
        self.held = held

    def size(self):
        raise AssertionError("cache_clear must take its count from clear()")

    def clear(self):
        held, self.held = self.held, 0
        return held


@pytest.mark.asyncio
async def test_cache_clear_reports_count_from_clear(dummy_mcp):
    fake = FakeClearingCache(held=5)
    cache_admin.register(dummy_mcp, cache=fake)

    assert await dummy_mcp.tools["cache_clear"]() == {"cleared": 5}
    assert await dummy_mcp.tools["cache_clear"]() == {"cleared": 0}
