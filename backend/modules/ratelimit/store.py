"""
In-memory rate limit store.

State is per process. Suitable for a single worker; multi-worker
deployments should provide an IRateLimitStore backed by a shared service.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Optional

from .interfaces import IRateLimitStore
from .models import WindowState

logger = logging.getLogger(__name__)

# Expired windows are swept once the map grows past this many keys.
PRUNE_THRESHOLD = 10_000


class InMemoryRateLimitStore(IRateLimitStore):
    """Dict of windows guarded by a single asyncio lock."""

    def __init__(self, prune_threshold: int = PRUNE_THRESHOLD) -> None:
        self._windows: dict[str, WindowState] = {}
        self._lock = asyncio.Lock()
        self._prune_threshold = prune_threshold

    async def get(self, key: str) -> Optional[WindowState]:
        state = self._windows.get(key)
        return replace(state) if state else None

    async def set(self, state: WindowState) -> None:
        async with self._lock:
            self._windows[state.key] = replace(state)

    async def reset(self, key: str) -> None:
        async with self._lock:
            self._windows.pop(key, None)

    async def increment(self, key: str, duration: float, now: float) -> WindowState:
        async with self._lock:
            state = self._windows.get(key)
            if state is None or state.is_expired(now):
                state = WindowState(key=key, started_at=now, count=0, duration=duration)
                self._windows[key] = state
                if len(self._windows) > self._prune_threshold:
                    self._prune(now)
            state.count += 1
            return replace(state)

    async def decrement(self, key: str, window_started_at: float) -> None:
        async with self._lock:
            state = self._windows.get(key)
            if state and state.started_at == window_started_at and state.count > 0:
                state.count -= 1

    def _prune(self, now: float) -> None:
        expired = [key for key, state in self._windows.items() if state.is_expired(now)]
        for key in expired:
            del self._windows[key]
        if expired:
            logger.debug(f"Pruned {len(expired)} expired rate limit windows")

    def __len__(self) -> int:
        return len(self._windows)
