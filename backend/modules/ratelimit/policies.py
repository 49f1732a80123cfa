"""
Rate limit policies and key resolution.

Three independent budgets:
- api:  general endpoints, per IP
- auth: login attempts, per IP + email, failures only
- ai:   assistant queries, per IP (upstream calls cost money)
"""

from typing import Optional

from shared.config import Settings

from .models import RateLimitPolicy

API_POLICY = "api"
AUTH_POLICY = "auth"
AI_POLICY = "ai"

API_MESSAGE = "Too many requests from this IP, please try again later."
AUTH_MESSAGE = "Too many login attempts. Please try again in {minutes} minutes."
AI_MESSAGE = (
    "You have reached the AI assistant query limit. Please try again in an hour."
)


def api_policy(settings: Settings) -> RateLimitPolicy:
    return RateLimitPolicy(
        name=API_POLICY,
        max_requests=settings.api_rate_limit_max,
        window_seconds=settings.api_rate_limit_window,
        message=API_MESSAGE,
    )


def auth_policy(settings: Settings) -> RateLimitPolicy:
    return RateLimitPolicy(
        name=AUTH_POLICY,
        max_requests=settings.auth_rate_limit_max,
        window_seconds=settings.auth_rate_limit_window,
        message=AUTH_MESSAGE,
        skip_successful=True,
        expose_retry_after=True,
    )


def ai_policy(settings: Settings) -> RateLimitPolicy:
    return RateLimitPolicy(
        name=AI_POLICY,
        max_requests=settings.ai_rate_limit_max,
        window_seconds=settings.ai_rate_limit_window,
        message=AI_MESSAGE,
    )


def ip_email_key(ip: str, email: Optional[str]) -> str:
    """Key by IP plus normalized email, falling back to IP alone."""
    if isinstance(email, str) and email.strip():
        return f"{ip}:{email.strip().lower()}"
    return ip
