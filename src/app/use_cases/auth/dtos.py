"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User


class UserInfo(BaseModel):
    """Sanitized user projection - never carries the password hash"""

    id: str
    email: str
    full_name: str
    gender: str
    mobile_no: str
    signup_type: str
    is_email_verified: bool
    is_mobile_verified: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            full_name=user.full_name,
            gender=user.gender.value,
            mobile_no=user.mobile_no,
            signup_type=user.signup_type.value,
            is_email_verified=user.is_email_verified,
            is_mobile_verified=user.is_mobile_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class LoginUserInfo(UserInfo):
    has_company: bool


class LoginResponse(BaseModel):
    """Response for user login use case"""

    token: str
    user: LoginUserInfo


class VerifyMobileResponse(BaseModel):
    user_id: str
    mobile_no: str
    is_mobile_verified: bool
    message: str


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    user_id: str
    email: str
    is_email_verified: bool
    message: str


class MessageResponse(BaseModel):
    """Acknowledgement-only responses (resend, reset)"""

    message: str


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    message: str
    reset_link: Optional[str] = None
