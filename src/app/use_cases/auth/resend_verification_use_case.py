"""
Resend Verification Email Use Case

Issues a fresh email verification link.
"""

import secrets
from datetime import datetime

from src.app.services.best_effort import run_best_effort
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import MessageResponse
from .register_use_case import EMAIL_VERIFICATION_TTL, build_verification_link

GENERIC_MESSAGE = "If the email exists, a verification link has been sent"


class ResendVerificationUseCase:
    """
    Business Rules:
    - Unverified user: new token replaces the old one, expiry reset to 24 hours
    - Verified or unknown email: nothing is sent
    - Same response for every case (no enumeration)
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender, client_url: str):
        self.uow = uow
        self.email_sender = email_sender
        self.client_url = client_url

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None or user.is_email_verified:
                return Return.ok(MessageResponse(message=GENERIC_MESSAGE))

            token = secrets.token_urlsafe(32)
            user.email_verification_token = token
            user.email_verification_expires_at = datetime.utcnow() + EMAIL_VERIFICATION_TTL
            await self.uow.users.update(user)
            await self.uow.commit()

            await run_best_effort(
                "send verification email",
                self.email_sender.send_verification_email(
                    user.email, build_verification_link(self.client_url, token)
                ),
            )

            return Return.ok(MessageResponse(message=GENERIC_MESSAGE))
