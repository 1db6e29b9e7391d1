"""Function-result memoization backed by a BoundedTTLCache.

Bounded replacement for the module-level dict memoizer: results live at
most ttl_seconds and at most max_size of them are kept.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Hashable, Optional, Tuple, TypeVar

from core.cache import MISS, BoundedTTLCache

R = TypeVar("R")


def make_key(fn: Callable[..., Any], args: Tuple[Any, ...], kwargs: dict) -> Hashable:
    # Qualified name keeps results apart when several functions share a cache.
    return (fn.__module__, fn.__qualname__, args, tuple(sorted(kwargs.items())))


def memoize(
    cache: BoundedTTLCache,
    *,
    key_fn: Optional[Callable[..., Hashable]] = None,
) -> Callable[[Callable[..., R]], Callable[..., R]]:
    """Cache the wrapped function's results in ``cache``.

    The wrapped function runs outside the cache lock, so two callers racing
    on the same cold key may both compute it; the last put wins.
    """

    def decorator(fn: Callable[..., R]) -> Callable[..., R]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> R:
            key = key_fn(*args, **kwargs) if key_fn is not None else make_key(fn, args, kwargs)
            cached = cache.get(key)
            if cached is not MISS:
                return cached
            result = fn(*args, **kwargs)
            cache.put(key, result)
            return result

        wrapper.cache = cache  # type: ignore[attr-defined]
        return wrapper

    return decorator
