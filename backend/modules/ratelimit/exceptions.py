"""
Rate limit module exceptions.
"""

from shared.exceptions import FinanceTrackerError

from .models import RateLimitDecision


class RateLimitExceededError(FinanceTrackerError):
    """Raised when a request exceeds its policy's window budget."""

    status_code = 429

    def __init__(self, decision: RateLimitDecision):
        super().__init__(
            decision.message,
            code="RATE_LIMIT_EXCEEDED",
            details={"policy": decision.policy.name, "limit": decision.limit},
        )
        self.decision = decision
        self.policy = decision.policy.name
        self.retry_after = decision.retry_after
        self.expose_retry_after = decision.policy.expose_retry_after
        self.headers = decision.headers()
