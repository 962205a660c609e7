"""
Request Password Reset Use Case

Generates a password reset link through the identity provider and mails it.
"""

from src.app.services.best_effort import run_best_effort
from src.app.services.email_sender import IEmailSender
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import RequestPasswordResetResponse

GENERIC_MESSAGE = "If this email exists, a reset link has been sent."


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - No email enumeration: every outcome, provider failures included,
      returns the same generic message
    - The identity provider owns the reset link
    - Relaxed mode returns the link instead of emailing it
    """

    def __init__(
        self,
        uow: UnitOfWork,
        identity_provider: IIdentityProvider,
        email_sender: IEmailSender,
        relaxed_mode: bool = False,
    ):
        self.uow = uow
        self.identity_provider = identity_provider
        self.email_sender = email_sender
        self.relaxed_mode = relaxed_mode

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(RequestPasswordResetResponse(message=GENERIC_MESSAGE))

            reset_link = await run_best_effort(
                "generate password reset link",
                self.identity_provider.generate_password_reset_link(user.email),
            )

            if self.relaxed_mode:
                return Return.ok(
                    RequestPasswordResetResponse(message=GENERIC_MESSAGE, reset_link=reset_link)
                )

            if reset_link is not None:
                await run_best_effort(
                    "send password reset email",
                    self.email_sender.send_password_reset_email(user.email, reset_link),
                )

            return Return.ok(RequestPasswordResetResponse(message=GENERIC_MESSAGE))
