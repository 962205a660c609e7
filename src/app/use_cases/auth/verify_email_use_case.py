"""
Verify Email Use Case

Handles email verification via the stored per-user token, or directly by
user id when running in relaxed mode.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .dtos import VerifyEmailResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must match the user's email_verification_token
    - Token must not be expired (24 hours from registration)
    - Sets is_email_verified = True; the token is kept so reopening the
      same link answers "already verified"
    - Already verified users return success without a write
    - Relaxed mode may verify by user id instead of token
    """

    def __init__(self, uow: UnitOfWork, relaxed_mode: bool = False):
        self.uow = uow
        self.relaxed_mode = relaxed_mode

    async def execute(
        self, token: Optional[str] = None, user_id: Optional[UUID] = None
    ) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Errors:
            - INVALID_TOKEN: Token missing, unknown, or user id not allowed
            - TOKEN_EXPIRED: Token has expired
            - USER_NOT_FOUND: Relaxed-mode user id does not exist
        """
        async with self.uow:
            if token:
                user = await self.uow.users.get_by_verification_token(token)
                if user is None:
                    return Return.err(
                        Error("INVALID_TOKEN", "Invalid or expired verification link")
                    )
                if not user.is_email_verified:
                    expires_at = user.email_verification_expires_at
                    if expires_at is None or datetime.utcnow() > expires_at:
                        return Return.err(
                            Error(
                                "TOKEN_EXPIRED",
                                "Verification link has expired. Please request a new one.",
                            )
                        )
            elif user_id is not None and self.relaxed_mode:
                user = await self.uow.users.get_by_id(user_id)
                if user is None:
                    return Return.err(Error("USER_NOT_FOUND", "User not found"))
            else:
                return Return.err(Error("INVALID_TOKEN", "Verification token is required"))

            if user.is_email_verified:
                return Return.ok(self._response(user, "Email is already verified"))

            user.is_email_verified = True
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Email verified for: {user.email}")
            return Return.ok(self._response(user, "Email successfully verified"))

    @staticmethod
    def _response(user: User, message: str) -> VerifyEmailResponse:
        return VerifyEmailResponse(
            user_id=str(user.id),
            email=user.email,
            is_email_verified=True,
            message=message,
        )
