"""
Background expiry sweep.

Best-effort memory reclamation: periodically drops expired entries from a
BoundedTTLCache in bounded batches. Reads already enforce the TTL, so this
only keeps expired entries from occupying memory between reads.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from core.cache import BoundedTTLCache, validate_batch, validate_interval

logger = logging.getLogger(__name__)


class ExpirySweeper:
    def __init__(self, cache: BoundedTTLCache, *, interval_seconds: float, max_batch: int) -> None:
        validate_interval(interval_seconds)
        validate_batch(max_batch)

        self._cache = cache
        self._interval = float(interval_seconds)
        self._max_batch = max_batch
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        # Each sweep() call holds the cache lock for one batch at most.
        # Yield between full batches so other tasks can get in.
        total = 0
        while True:
            removed = self._cache.sweep(self._max_batch)
            total += removed
            if removed < self._max_batch:
                break
            await asyncio.sleep(0)

        if total:
            logger.debug("Sweep removed %d expired entries", total)
        return total

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.run_once()

    def start(self) -> None:
        # Must be called from inside a running event loop.
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(
            "Expiry sweeper started (interval=%.1fs, batch=%d)", self._interval, self._max_batch
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Expiry sweeper stopped")
