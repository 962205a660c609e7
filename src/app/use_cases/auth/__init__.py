"""
Authentication Use Cases

Registration, login, verification and password reset.
"""

from .register_use_case import RegisterUseCase
from .register_dto import RegisterCommand, RegisterResponse
from .login_use_case import LoginUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .verify_mobile_use_case import VerifyMobileUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .resend_otp_use_case import ResendOtpUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    LoginResponse,
    LoginUserInfo,
    MessageResponse,
    RequestPasswordResetResponse,
    UserInfo,
    VerifyEmailResponse,
    VerifyMobileResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "VerifyEmailUseCase",
    "VerifyMobileUseCase",
    "ResendVerificationUseCase",
    "ResendOtpUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "VerifyEmailResponse",
    "VerifyMobileResponse",
    "MessageResponse",
    "RequestPasswordResetResponse",
    # DTOs - Nested Models
    "UserInfo",
    "LoginUserInfo",
]
