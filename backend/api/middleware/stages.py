"""
Pipeline stages for rate limiting and request validation.
"""

import logging

from modules.ratelimit import RateLimitExceededError, ip_email_key
from modules.validation import FieldError, RequestSchema, RequestValidationError, validate

from .pipeline import Continue, RequestContext, StageResult, Terminate

logger = logging.getLogger(__name__)


class RateLimitStage:
    """
    Count the request against a policy, keyed by caller IP.

    With ``by_email`` the key also includes the request's email (if any),
    so one address being guessed at doesn't lock out everyone behind a
    shared IP. Policies with ``skip_successful`` release the hit once the
    handler succeeds.
    """

    def __init__(self, policy: str, by_email: bool = False) -> None:
        self.policy = policy
        self.by_email = by_email

    def key_for(self, ctx: RequestContext) -> str:
        if self.by_email and isinstance(ctx.body, dict):
            return ip_email_key(ctx.client_ip, ctx.body.get("email"))
        return ctx.client_ip

    async def __call__(self, ctx: RequestContext) -> StageResult:
        limiter = ctx.container.limiter(self.policy)
        decision = await limiter.hit(self.key_for(ctx))
        ctx.rate_limits.append(decision)

        if not decision.allowed:
            logger.warning(
                f"Rate limit '{self.policy}' exceeded for {decision.key} "
                f"(count={decision.count}, limit={decision.limit})"
            )
            return Terminate(RateLimitExceededError(decision))

        ctx.response_headers.update(decision.headers())
        return Continue(ctx)

    async def on_complete(self, ctx: RequestContext, succeeded: bool) -> None:
        limiter = ctx.container.limiter(self.policy)
        if not (succeeded and limiter.policy.skip_successful):
            return
        for decision in ctx.rate_limits:
            if decision.policy.name == self.policy and decision.allowed:
                await limiter.release(decision)


class ValidationStage:
    """Replace body/query/params with their normalized form, or reject."""

    def __init__(self, schema: RequestSchema) -> None:
        self.schema = schema

    async def __call__(self, ctx: RequestContext) -> StageResult:
        if ctx.body_error and self.schema.body is not None:
            return Terminate(RequestValidationError([FieldError("body", ctx.body_error)]))

        try:
            normalized = validate(
                self.schema,
                {"body": ctx.body, "query": ctx.query, "params": ctx.params},
            )
        except RequestValidationError as e:
            logger.debug(f"Request rejected with {len(e.field_errors)} field error(s)")
            return Terminate(e)

        ctx.body = normalized.body
        ctx.query = normalized.query
        ctx.params = normalized.params
        return Continue(ctx)
