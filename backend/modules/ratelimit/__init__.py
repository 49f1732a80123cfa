"""
Rate limiting module.

Fixed-window request counting per key with pluggable counter storage.

Public API:
- RateLimiter: Counts hits for one policy
- RateLimitPolicy, RateLimitDecision, WindowState: Models
- IRateLimitStore / InMemoryRateLimitStore: Counter storage
- RateLimitExceededError: Raised when a budget is exhausted
- Policy builders: api_policy, auth_policy, ai_policy
"""

from .exceptions import RateLimitExceededError
from .interfaces import IRateLimitStore
from .limiter import RateLimiter
from .models import RateLimitDecision, RateLimitPolicy, WindowState
from .policies import (
    AI_POLICY,
    API_POLICY,
    AUTH_POLICY,
    ai_policy,
    api_policy,
    auth_policy,
    ip_email_key,
)
from .store import InMemoryRateLimitStore

__all__ = [
    "RateLimiter",
    "RateLimitPolicy",
    "RateLimitDecision",
    "WindowState",
    "IRateLimitStore",
    "InMemoryRateLimitStore",
    "RateLimitExceededError",
    "API_POLICY",
    "AUTH_POLICY",
    "AI_POLICY",
    "api_policy",
    "auth_policy",
    "ai_policy",
    "ip_email_key",
]
