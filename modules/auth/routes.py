"""
Authentication API endpoints.

Registration, login and the password-reset and email-verification flows.
Purpose tokens are echoed in responses only when ENVIRONMENT=development.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_app_settings, get_auth_service
from api.middleware.rate_limit import auth_rate_limit
from shared.config import Settings

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    EmailRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    User,
    UserSummary,
    VerificationOutcome,
)

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If the email exists, a reset link has been sent"


def _summary(user: User, include_verified: bool = False) -> UserSummary:
    return UserSummary(
        id=user.id,
        email=user.email,
        name=user.name,
        is_verified=user.is_verified if include_verified else None,
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=201,
    dependencies=[Depends(auth_rate_limit)],
)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    """
    Create an unverified account and send the verification link.

    Returns a session token so the client is logged in straight away.
    """
    result = await service.register(request.email, request.password, request.name)
    return AuthResponse(
        message="Registration successful. Please check your email for verification.",
        token=result.token,
        user=_summary(result.user, include_verified=True),
        verification_token=result.verification_token if settings.is_development else None,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(auth_rate_limit)],
)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    result = await service.login(request.email, request.password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=_summary(result.user),
    )


@router.post("/logout", response_model=MessageResponse, response_model_exclude_none=True)
async def logout() -> MessageResponse:
    """
    Log out. Tokens are stateless, so the client just discards its token.
    """
    return MessageResponse(message="Logged out successfully")


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(auth_rate_limit)],
)
async def forgot_password(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """
    Send a password reset link.

    The response is the same whether or not the email is registered.
    """
    token = await service.request_password_reset(request.email)
    return MessageResponse(
        message=FORGOT_PASSWORD_MESSAGE,
        reset_token=token if settings.is_development else None,
    )


@router.post("/reset-password/{token}", response_model=MessageResponse, response_model_exclude_none=True)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    await service.complete_password_reset(token, request.password)
    return MessageResponse(message="Password reset successful")


@router.get("/verify-email/{token}", response_model=MessageResponse, response_model_exclude_none=True)
async def verify_email(
    token: str,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Mark the token's user as verified. Safe to call more than once.
    """
    outcome = await service.verify_email(token)
    if outcome == VerificationOutcome.ALREADY_VERIFIED:
        return MessageResponse(message="Email already verified")
    return MessageResponse(message="Email verified successfully")


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
async def resend_verification(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    result = await service.resend_verification(request.email)
    if result.already_verified:
        return MessageResponse(message="Email is already verified")
    return MessageResponse(
        message="Verification email sent",
        verification_token=result.verification_token if settings.is_development else None,
    )
