"""
Bearer token authentication stage.

Extracts the token from the Authorization header, verifies it with the
TokenCodec and resolves the user it names. On success the request context
carries an AuthenticatedUser; on failure the pipeline stops with a 401.
"""

import logging
from typing import Optional

from modules.auth.exceptions import InvalidTokenError, MissingTokenError, UserNotFoundError

from .pipeline import Continue, RequestContext, StageResult, Terminate

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Get the token from an ``Authorization: Bearer <token>`` header value.

    Returns None if the header is absent, uses another scheme, or has an
    empty token.
    """
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class AuthGateStage:
    """
    Requires a valid identity token naming an existing user.

    Verification detail is logged, never returned: every bad token gets
    the same "token failed" response.
    """

    async def __call__(self, ctx: RequestContext) -> StageResult:
        token = extract_bearer_token(ctx.headers.get("authorization"))
        if token is None:
            return Terminate(MissingTokenError())

        try:
            user_id = ctx.container.token_codec.verify(token)
        except InvalidTokenError as e:
            logger.debug(f"Rejected token from {ctx.client_ip}: {e.details.get('reason')}")
            return Terminate(e)

        user = await ctx.container.users.get_identity(user_id)
        if user is None:
            logger.info(f"Token for unknown user {user_id}")
            return Terminate(UserNotFoundError(user_id))

        ctx.user = user
        return Continue(ctx)
