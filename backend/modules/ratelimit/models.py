"""
Rate limit module data models.
"""

import math
from dataclasses import dataclass
from pydantic import BaseModel, Field


@dataclass
class WindowState:
    """
    Counter for one key within one fixed window.

    The window covers ``[started_at, started_at + duration)``; a request
    arriving exactly at ``reset_at`` belongs to the next window.
    """

    key: str
    started_at: float
    count: int
    duration: float

    @property
    def reset_at(self) -> float:
        return self.started_at + self.duration

    def is_expired(self, now: float) -> bool:
        return now >= self.reset_at


class RateLimitPolicy(BaseModel):
    """
    Limits applied to one family of endpoints.

    ``message`` may reference ``{minutes}`` (window length rounded up)
    and ``{retry_after}`` (seconds until the window resets).
    """

    model_config = {"frozen": True}

    name: str = Field(..., description="Policy identifier (api, auth, ai)")
    max_requests: int = Field(..., gt=0, description="Requests allowed per window")
    window_seconds: float = Field(..., gt=0, description="Window length")
    message: str = Field(..., description="Rejection message template")
    skip_successful: bool = Field(
        default=False, description="Release the hit when the request succeeds"
    )
    expose_retry_after: bool = Field(
        default=False, description="Include retryAfter in the rejection body"
    )

    @property
    def window_minutes(self) -> int:
        return math.ceil(self.window_seconds / 60)


class RateLimitDecision(BaseModel):
    """Outcome of counting one request against a policy."""

    model_config = {"frozen": True}

    policy: RateLimitPolicy
    key: str
    count: int
    window_started_at: float
    reset_at: float
    now: float

    @property
    def limit(self) -> int:
        return self.policy.max_requests

    @property
    def allowed(self) -> bool:
        return self.count <= self.policy.max_requests

    @property
    def remaining(self) -> int:
        return max(0, self.policy.max_requests - self.count)

    @property
    def retry_after(self) -> int:
        """Whole seconds until the window resets, never less than 1."""
        return max(1, math.ceil(self.reset_at - self.now))

    @property
    def message(self) -> str:
        return self.policy.message.format(
            minutes=self.policy.window_minutes,
            retry_after=self.retry_after,
        )

    def headers(self) -> dict[str, str]:
        """Informational RateLimit-* headers for the response."""
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.retry_after),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after)
        return headers
