"""Tests for the fixed-window rate limiter."""

import asyncio

import pytest

from modules.ratelimit import (
    InMemoryRateLimitStore,
    RateLimiter,
    RateLimitExceededError,
    RateLimitPolicy,
    ip_email_key,
)


class ManualClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_policy(**overrides) -> RateLimitPolicy:
    values = {
        "name": "test",
        "max_requests": 3,
        "window_seconds": 60,
        "message": "Slow down, try again in {minutes} minutes.",
    }
    values.update(overrides)
    return RateLimitPolicy(**values)


@pytest.fixture
def clock():
    return ManualClock()


class TestRateLimiter:
    @pytest.mark.asyncio
    async def test_allows_up_to_max(self, clock):
        """The first max_requests hits are allowed, the next is not."""
        limiter = RateLimiter(make_policy(), clock=clock)

        decisions = [await limiter.hit("1.2.3.4") for _ in range(4)]

        assert [d.allowed for d in decisions] == [True, True, True, False]
        assert [d.remaining for d in decisions] == [2, 1, 0, 0]

    @pytest.mark.asyncio
    async def test_window_resets(self, clock):
        """A hit at exactly reset_at starts a fresh window."""
        limiter = RateLimiter(make_policy(max_requests=1), clock=clock)
        await limiter.hit("ip")
        assert not (await limiter.hit("ip")).allowed

        clock.now += 60
        decision = await limiter.hit("ip")
        assert decision.allowed
        assert decision.count == 1
        assert decision.window_started_at == clock.now

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, clock):
        limiter = RateLimiter(make_policy(max_requests=1), clock=clock)
        await limiter.hit("a")
        assert (await limiter.hit("b")).allowed

    @pytest.mark.asyncio
    async def test_policies_sharing_store_are_independent(self, clock):
        """Two policies on one store must not count each other's hits."""
        store = InMemoryRateLimitStore()
        api = RateLimiter(make_policy(name="api", max_requests=1), store=store, clock=clock)
        auth = RateLimiter(make_policy(name="auth", max_requests=1), store=store, clock=clock)

        await api.hit("ip")
        assert (await auth.hit("ip")).allowed

    @pytest.mark.asyncio
    async def test_retry_after(self, clock):
        limiter = RateLimiter(make_policy(max_requests=1), clock=clock)
        await limiter.hit("ip")
        clock.now += 15.5
        decision = await limiter.hit("ip")
        assert decision.retry_after == 45

    @pytest.mark.asyncio
    async def test_enforce_raises(self, clock):
        """enforce raises RateLimitExceededError once over budget."""
        limiter = RateLimiter(make_policy(max_requests=1), clock=clock)
        await limiter.enforce("ip")

        with pytest.raises(RateLimitExceededError) as exc_info:
            await limiter.enforce("ip")

        error = exc_info.value
        assert error.status_code == 429
        assert error.message == "Slow down, try again in 1 minutes."
        assert error.headers["Retry-After"] == "60"

    @pytest.mark.asyncio
    async def test_release_gives_back_hit(self, clock):
        limiter = RateLimiter(make_policy(max_requests=1), clock=clock)
        decision = await limiter.hit("ip")
        await limiter.release(decision)
        assert (await limiter.hit("ip")).allowed

    @pytest.mark.asyncio
    async def test_release_ignores_old_window(self, clock):
        """Releasing a hit from an expired window doesn't touch the new one."""
        limiter = RateLimiter(make_policy(max_requests=1), clock=clock)
        old = await limiter.hit("ip")
        clock.now += 60
        await limiter.hit("ip")

        await limiter.release(old)
        assert not (await limiter.hit("ip")).allowed

    @pytest.mark.asyncio
    async def test_reset(self, clock):
        limiter = RateLimiter(make_policy(max_requests=1), clock=clock)
        await limiter.hit("ip")
        await limiter.reset("ip")
        assert (await limiter.hit("ip")).allowed

    @pytest.mark.asyncio
    async def test_concurrent_hits_never_exceed_limit(self, clock):
        """Parallel hits are counted atomically."""
        limiter = RateLimiter(make_policy(max_requests=5), clock=clock)
        decisions = await asyncio.gather(*(limiter.hit("ip") for _ in range(20)))
        assert sum(d.allowed for d in decisions) == 5
        assert sorted(d.count for d in decisions) == list(range(1, 21))


class TestDecisionHeaders:
    @pytest.mark.asyncio
    async def test_headers_when_allowed(self, clock):
        limiter = RateLimiter(make_policy(), clock=clock)
        headers = (await limiter.hit("ip")).headers()
        assert headers == {
            "RateLimit-Limit": "3",
            "RateLimit-Remaining": "2",
            "RateLimit-Reset": "60",
        }


class TestStore:
    @pytest.mark.asyncio
    async def test_prunes_expired_windows(self):
        store = InMemoryRateLimitStore(prune_threshold=2)
        await store.increment("a", 10, now=0)
        await store.increment("b", 10, now=0)
        await store.increment("c", 10, now=20)
        assert len(store) == 1
        assert await store.get("a") is None

    @pytest.mark.asyncio
    async def test_decrement_floor_zero(self):
        store = InMemoryRateLimitStore()
        state = await store.increment("a", 10, now=0)
        await store.decrement("a", state.started_at)
        await store.decrement("a", state.started_at)
        assert (await store.get("a")).count == 0


class TestIpEmailKey:
    def test_includes_normalized_email(self):
        assert ip_email_key("1.1.1.1", " Foo@Example.com ") == "1.1.1.1:foo@example.com"

    @pytest.mark.parametrize("email", [None, "", "   ", 42])
    def test_falls_back_to_ip(self, email):
        assert ip_email_key("1.1.1.1", email) == "1.1.1.1"
