"""
Fixed-window rate limiter.

Each call to ``hit`` counts one request for a key and reports whether it
fits in the policy's budget. Policies that only count failures
(``skip_successful``) still count every request up front and ``release``
it once the request has succeeded, so parallel attempts can never slip in
above the limit while earlier ones are in flight.
"""

import logging
import time
from typing import Callable, Optional

from .exceptions import RateLimitExceededError
from .interfaces import IRateLimitStore
from .models import RateLimitDecision, RateLimitPolicy
from .store import InMemoryRateLimitStore

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class RateLimiter:
    """Applies one RateLimitPolicy over an IRateLimitStore."""

    def __init__(
        self,
        policy: RateLimitPolicy,
        store: Optional[IRateLimitStore] = None,
        clock: Clock = time.time,
    ) -> None:
        self.policy = policy
        self._store = store if store is not None else InMemoryRateLimitStore()
        self._clock = clock

    def _store_key(self, key: str) -> str:
        # Policies may share one store
        return f"{self.policy.name}:{key}"

    async def hit(self, key: str) -> RateLimitDecision:
        """
        Count one request for ``key``.

        Returns:
            Decision describing the window after counting; check ``allowed``
        """
        now = self._clock()
        state = await self._store.increment(self._store_key(key), self.policy.window_seconds, now)
        return RateLimitDecision(
            policy=self.policy,
            key=key,
            count=state.count,
            window_started_at=state.started_at,
            reset_at=state.reset_at,
            now=now,
        )

    async def enforce(self, key: str) -> RateLimitDecision:
        """
        Count one request and reject it if over budget.

        Raises:
            RateLimitExceededError: If the count exceeds the policy maximum
        """
        decision = await self.hit(key)
        if not decision.allowed:
            logger.warning(
                f"Rate limit '{self.policy.name}' exceeded for key={key} "
                f"(count={decision.count}, limit={decision.limit})"
            )
            raise RateLimitExceededError(decision)
        return decision

    async def release(self, decision: RateLimitDecision) -> None:
        """Give back a request counted by ``hit`` within the same window."""
        await self._store.decrement(self._store_key(decision.key), decision.window_started_at)

    async def reset(self, key: str) -> None:
        await self._store.reset(self._store_key(key))
