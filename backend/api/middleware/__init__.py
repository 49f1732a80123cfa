"""
Request pipeline building blocks and the standard route compositions.

    public(schema)        validate
    protected(schema)     api limiter -> auth gate -> validate
    ai_protected(schema)  ai limiter  -> auth gate -> validate
"""

from typing import Optional

from modules.ratelimit import AI_POLICY, API_POLICY
from modules.validation import RequestSchema

from .auth import AuthGateStage, extract_bearer_token
from .pipeline import Continue, RequestContext, RequestPipeline, Stage, StageResult, Terminate
from .stages import RateLimitStage, ValidationStage


def _with_validation(pipeline: RequestPipeline, schema: Optional[RequestSchema]) -> RequestPipeline:
    return pipeline.then(ValidationStage(schema)) if schema is not None else pipeline


def public(schema: Optional[RequestSchema] = None) -> RequestPipeline:
    return _with_validation(RequestPipeline(), schema)


def protected(schema: Optional[RequestSchema] = None) -> RequestPipeline:
    return _with_validation(RequestPipeline(RateLimitStage(API_POLICY), AuthGateStage()), schema)


def ai_protected(schema: Optional[RequestSchema] = None) -> RequestPipeline:
    return _with_validation(RequestPipeline(RateLimitStage(AI_POLICY), AuthGateStage()), schema)


__all__ = [
    "AuthGateStage",
    "Continue",
    "RateLimitStage",
    "RequestContext",
    "RequestPipeline",
    "Stage",
    "StageResult",
    "Terminate",
    "ValidationStage",
    "ai_protected",
    "extract_bearer_token",
    "protected",
    "public",
]
