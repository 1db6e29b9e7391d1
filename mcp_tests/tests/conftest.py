import pytest

import core.cache as cache_mod


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool and resource registration."""

    def __init__(self) -> None:
        self.tools = {}
        self.resources = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator

    def resource(self, uri: str, **kwargs):
        def _decorator(fn):
            self.resources[uri] = fn
            return fn
        return _decorator


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def clock(monkeypatch):
    c = FakeClock()
    monkeypatch.setattr(cache_mod.time, "monotonic", c)
    return c
