"""
Request pipeline.

A route's cross-cutting checks are an explicit, ordered list of stages.
Each stage receives the RequestContext and returns either ``Continue``
(pass the context on) or ``Terminate`` (stop here with an error). The
driver stops at the first ``Terminate``; nothing after it runs.

A pipeline is bound to a route as a FastAPI dependency:

    protected = RequestPipeline(
        RateLimitStage(API_POLICY),
        AuthGateStage(),
        ValidationStage(create_transaction_schema),
    )

    @router.post("")
    async def create(ctx: RequestContext = Depends(protected)):
        ...

Stages may also define ``on_complete(ctx, succeeded)``, called after the
handler finishes, e.g. to give back a rate-limit hit on success.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, AsyncIterator, Optional, Protocol, Union

from fastapi import Request, Response

from shared.exceptions import FinanceTrackerError
from shared.models import AuthenticatedUser
from modules.ratelimit import RateLimitDecision

if TYPE_CHECKING:
    from ..dependencies import ServiceContainer

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class RequestContext:
    """
    Per-request state shared by pipeline stages and the handler.

    ``body``/``query``/``params`` start as the raw request data and are
    replaced by normalized values once a ValidationStage has run.
    """

    container: "ServiceContainer"
    client_ip: str
    headers: dict[str, str]
    body: Any = None
    query: dict[str, Any] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    body_error: Optional[str] = None
    user: Optional[AuthenticatedUser] = None
    rate_limits: list[RateLimitDecision] = field(default_factory=list)
    response_headers: dict[str, str] = field(default_factory=dict)
    stages_run: list["Stage"] = field(default_factory=list)

    @classmethod
    async def from_request(cls, request: Request) -> "RequestContext":
        body: Any = None
        body_error = None
        # Form bodies are parsed by FastAPI itself and the stream is already consumed
        content_type = request.headers.get("content-type", "")
        raw_body = b"" if content_type.startswith(FORM_CONTENT_TYPES) else await request.body()
        if raw_body:
            try:
                body = json.loads(raw_body)
            except ValueError:
                body_error = "Malformed JSON body"

        return cls(
            container=request.app.state.container,
            client_ip=request.client.host if request.client else "unknown",
            headers={key.lower(): value for key, value in request.headers.items()},
            body=body,
            query=dict(request.query_params),
            params=dict(request.path_params),
            body_error=body_error,
        )

    def require_user(self) -> AuthenticatedUser:
        """Return the authenticated user; only valid after AuthGateStage."""
        if self.user is None:
            raise RuntimeError("Route handler requires AuthGateStage in its pipeline")
        return self.user


@dataclass(frozen=True)
class Continue:
    context: RequestContext


@dataclass(frozen=True)
class Terminate:
    error: FinanceTrackerError


StageResult = Union[Continue, Terminate]


class Stage(Protocol):
    """One step of a pipeline."""

    async def __call__(self, ctx: RequestContext) -> StageResult:
        ...


def _attach_headers(error: FinanceTrackerError, headers: dict[str, str]) -> None:
    """Carry headers gathered by stages onto an error response."""
    for name, value in headers.items():
        error.headers.setdefault(name, value)


class RequestPipeline:
    """Ordered list of stages run before a route handler."""

    def __init__(self, *stages: Stage) -> None:
        self.stages: tuple[Stage, ...] = stages

    def then(self, *stages: Stage) -> "RequestPipeline":
        """New pipeline with extra stages appended."""
        return RequestPipeline(*self.stages, *stages)

    async def run(self, ctx: RequestContext) -> StageResult:
        """Run stages in order, stopping at the first Terminate."""
        for stage in self.stages:
            ctx.stages_run.append(stage)
            outcome = await stage(ctx)
            if isinstance(outcome, Terminate):
                return outcome
            ctx = outcome.context
        return Continue(ctx)

    async def complete(self, ctx: RequestContext, succeeded: bool) -> None:
        """Notify stages that ran, last first, of the request outcome."""
        for stage in reversed(ctx.stages_run):
            on_complete = getattr(stage, "on_complete", None)
            if on_complete is not None:
                await on_complete(ctx, succeeded)

    async def __call__(self, request: Request, response: Response) -> AsyncIterator[RequestContext]:
        ctx = await RequestContext.from_request(request)
        outcome = await self.run(ctx)

        if isinstance(outcome, Terminate):
            await self.complete(ctx, succeeded=False)
            _attach_headers(outcome.error, ctx.response_headers)
            raise outcome.error

        ctx = outcome.context
        response.headers.update(ctx.response_headers)

        succeeded = False
        try:
            yield ctx
            succeeded = True
        except FinanceTrackerError as e:
            _attach_headers(e, ctx.response_headers)
            raise
        finally:
            await self.complete(ctx, succeeded)
