"""
Auth API endpoints.

Registration, login and password reset are public. Login additionally
goes through the auth rate limiter, keyed by IP and email, which only
keeps failed attempts.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware import RateLimitStage, RequestContext, protected, public
from modules.ratelimit import AUTH_POLICY
from shared.models import SuccessResponse

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    UserResponse,
)
from .schemas import (
    change_password_schema,
    forgot_password_schema,
    login_schema,
    register_schema,
    reset_password_schema,
    update_profile_schema,
)

RESET_REQUESTED_MESSAGE = "If the email exists, we will send a link to reset the password."

router = APIRouter()

login_pipeline = public(login_schema).then(RateLimitStage(AUTH_POLICY, by_email=True))


@router.post(
    "/register", response_model=AuthResponse, status_code=201, response_model_exclude_none=True
)
async def register(
    ctx: RequestContext = Depends(public(register_schema)),
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = await service.register(RegisterRequest.model_validate(ctx.body))
    return AuthResponse(user=user.to_public(), token=token)


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
async def login(
    ctx: RequestContext = Depends(login_pipeline),
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = await service.login(LoginRequest.model_validate(ctx.body))
    return AuthResponse(user=user.to_public(), token=token)


@router.post("/forgot-password", response_model=SuccessResponse)
async def forgot_password(
    ctx: RequestContext = Depends(public(forgot_password_schema)),
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """Always succeeds, whether or not the email belongs to an account."""
    await service.request_password_reset(ForgotPasswordRequest.model_validate(ctx.body))
    return SuccessResponse(message=RESET_REQUESTED_MESSAGE)


@router.post("/reset-password", response_model=SuccessResponse)
async def reset_password(
    ctx: RequestContext = Depends(public(reset_password_schema)),
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse:
    await service.reset_password(ResetPasswordRequest.model_validate(ctx.body))
    return SuccessResponse(message="Password updated successfully")


@router.get("/me", response_model=UserResponse, response_model_exclude_none=True)
async def get_me(
    ctx: RequestContext = Depends(protected()),
    service: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    user = await service.get_user(ctx.require_user().id)
    return UserResponse(user=user.to_public(include_created_at=True))


@router.put("/profile", response_model=UserResponse, response_model_exclude_none=True)
async def update_profile(
    ctx: RequestContext = Depends(protected(update_profile_schema)),
    service: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    user = await service.update_profile(
        ctx.require_user().id, UpdateProfileRequest.model_validate(ctx.body)
    )
    return UserResponse(user=user.to_public())


@router.put("/password", response_model=SuccessResponse)
async def change_password(
    ctx: RequestContext = Depends(protected(change_password_schema)),
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse:
    await service.change_password(
        ctx.require_user().id, ChangePasswordRequest.model_validate(ctx.body)
    )
    return SuccessResponse(message="Password updated successfully")
