import re
from typing import Optional
from urllib.parse import urlencode
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, EmailStr, Field, field_validator

from src.api.error import raise_for_error
from src.api.responses import ApiResponse, ok
from src.api.utils.auth import optional_auth, require_auth, require_profile_access
from src.api.utils.rate_limit import limit_login_attempts
from src.app.services.email_sender import IEmailSender
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    MessageResponse,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResendOtpUseCase,
    ResendVerificationUseCase,
    ResetPasswordUseCase,
    UserInfo,
    VerifyEmailResponse,
    VerifyEmailUseCase,
    VerifyMobileResponse,
    VerifyMobileUseCase,
)
from src.app.use_cases.users import (
    AuthenticatedPrincipal,
    GetProfileUseCase,
    ProfileResponse,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.depends import get_config, get_email_sender, get_identity_provider, get_unit_of_work
from src.domain.entities import Gender, SignupType

router = APIRouter(prefix="/auth", tags=["Authentication"])

MOBILE_PATTERN = r"^\+[1-9]\d{1,14}$"
FULL_NAME_PATTERN = r"^[A-Za-z\s]+$"
PASSWORD_SPECIALS = "@$!%*?&"


def check_password_strength(password: str) -> str:
    """Require lower, upper, digit and one of @$!%*?&"""
    if not (
        re.search(r"[a-z]", password)
        and re.search(r"[A-Z]", password)
        and re.search(r"\d", password)
        and any(char in PASSWORD_SPECIALS for char in password)
    ):
        raise ValueError(
            "Password must contain at least one uppercase, one lowercase, "
            "one number and one special character"
        )
    return password


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    full_name: str = Field(..., min_length=2, max_length=255, pattern=FULL_NAME_PATTERN)
    gender: Gender = Field(..., description="m, f or o")
    mobile_no: str = Field(..., pattern=MOBILE_PATTERN, description="Mobile number in E.164 format")
    signup_type: SignupType = Field(default=SignupType.email)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return check_password_strength(value)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[RegisterResponse],
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    User Registration

    Creates the account locally and at the identity provider, sends the
    SMS OTP and the email verification link.

    Raises:
        - 409 Conflict: Email or mobile number already registered
        - 400 Bad Request: Invalid input or weak password
        - 500 Internal Server Error: Identity provider failure
    """
    command = RegisterCommand(**request.model_dump())

    use_case = RegisterUseCase(uow, identity_provider, email_sender, config.CLIENT_URL)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return ok(
        result.value,
        "User registered successfully. Please verify your email and mobile number.",
    )


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[LoginResponse],
    dependencies=[Depends(limit_login_attempts)],
)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    config=Depends(get_config),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials or provider check failed
        - 403 Forbidden: Email not verified
        - 429 Too Many Requests: Login attempts exhausted
    """
    use_case = LoginUseCase(uow, identity_provider, relaxed_mode=config.RELAXED_MODE)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Login successful")


def _wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "")


def _verification_redirect(client_url: str, outcome: str, message: str) -> RedirectResponse:
    query = urlencode({"status": outcome, "msg": message})
    return RedirectResponse(
        f"{client_url.rstrip('/')}/verify-email?{query}",
        status_code=status.HTTP_302_FOUND,
    )


@router.get("/verify-email", response_model=ApiResponse[VerifyEmailResponse])
async def verify_email(
    request: Request,
    token: Optional[str] = Query(None),
    user_id: Optional[UUID] = Query(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Email Verification

    Browsers opening the emailed link are redirected to the client app
    with the outcome in the query string; API clients get JSON.
    """
    use_case = VerifyEmailUseCase(uow, relaxed_mode=config.RELAXED_MODE)
    result = await use_case.execute(token=token, user_id=user_id)

    if _wants_html(request):
        if result.is_err():
            return _verification_redirect(config.CLIENT_URL, "error", result.error.message)
        return _verification_redirect(config.CLIENT_URL, "success", result.value.message)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, result.value.message)


class ResendVerificationRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post("/resend-verification", response_model=ApiResponse[MessageResponse])
async def resend_verification(
    request: ResendVerificationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Resend Verification Email

    Same response whether or not the email is registered.
    """
    use_case = ResendVerificationUseCase(uow, email_sender, config.CLIENT_URL)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, result.value.message)


class VerifyMobileRequest(BaseModel):
    user_id: UUID
    otp: str = Field(..., pattern=r"^\d{6}$", description="6-digit code sent by SMS")


@router.post("/verify-mobile", response_model=ApiResponse[VerifyMobileResponse])
async def verify_mobile(
    request: VerifyMobileRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Mobile Verification

    Raises:
        - 400 Bad Request: Invalid or expired OTP
        - 404 Not Found: Unknown user
    """
    use_case = VerifyMobileUseCase(uow, identity_provider)
    result = await use_case.execute(request.user_id, request.otp)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, result.value.message)


class ResendOtpRequest(BaseModel):
    user_id: UUID


@router.post("/resend-otp", response_model=ApiResponse[MessageResponse])
async def resend_otp(
    request: ResendOtpRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    use_case = ResendOtpUseCase(uow, identity_provider)
    result = await use_case.execute(request.user_id)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, result.value.message)


class RequestPasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/request-password-reset", response_model=ApiResponse[RequestPasswordResetResponse]
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    email_sender: IEmailSender = Depends(get_email_sender),
    config=Depends(get_config),
):
    """
    Request Password Reset

    Same response whether or not the email is registered. In relaxed
    mode the reset link is returned in the response body.
    """
    use_case = RequestPasswordResetUseCase(
        uow, identity_provider, email_sender, relaxed_mode=config.RELAXED_MODE
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, result.value.message)


class ResetPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    new_password: str = Field(..., min_length=8, description="New password (min 8 chars)")

    @field_validator("new_password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return check_password_strength(value)


@router.post("/reset-password", response_model=ApiResponse[MessageResponse])
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    use_case = ResetPasswordUseCase(uow, identity_provider)
    result = await use_case.execute(request.email, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, result.value.message)


@router.get("/profile", response_model=ApiResponse[ProfileResponse])
async def get_profile(
    principal: AuthenticatedPrincipal = Depends(require_profile_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User Profile

    Reachable before verification so the client can show what is pending.
    """
    result = await GetProfileUseCase(uow).execute(UUID(principal.id))

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Profile retrieved successfully")


class UpdateProfileRequest(BaseModel):
    full_name: Optional[str] = Field(
        None, min_length=2, max_length=255, pattern=FULL_NAME_PATTERN
    )
    gender: Optional[Gender] = None
    mobile_no: Optional[str] = Field(None, pattern=MOBILE_PATTERN)


@router.put("/profile", response_model=ApiResponse[UserInfo])
async def update_profile(
    request: UpdateProfileRequest,
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Current User Profile

    Raises:
        - 400 Bad Request: No field supplied
        - 409 Conflict: Mobile number used by another account
    """
    command = UpdateProfileCommand(**request.model_dump())
    result = await UpdateProfileUseCase(uow).execute(UUID(principal.id), command)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Profile updated successfully")


@router.post("/logout", response_model=ApiResponse[None])
async def logout(principal: AuthenticatedPrincipal = Depends(require_auth)):
    """Tokens are stateless; the client discards its copy."""
    return ok(None, "Logged out successfully")


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[AuthenticatedPrincipal] = None


@router.get("/session", response_model=ApiResponse[SessionResponse])
async def session(principal: Optional[AuthenticatedPrincipal] = Depends(optional_auth)):
    return ok(
        SessionResponse(authenticated=principal is not None, user=principal),
        "Session resolved",
    )
