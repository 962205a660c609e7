import logging
import secrets
from datetime import datetime, timedelta

import bcrypt

from src.app.services.best_effort import run_best_effort
from src.app.services.email_sender import IEmailSender
from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .register_dto import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)

EMAIL_VERIFICATION_TTL = timedelta(days=1)

_PROVIDER_ERRORS = {
    IdentityProviderError.EMAIL_EXISTS: Error("EMAIL_ALREADY_EXISTS", "Email already registered"),
    IdentityProviderError.PHONE_EXISTS: Error("MOBILE_ALREADY_EXISTS", "Mobile number already registered"),
    IdentityProviderError.INVALID_EMAIL: Error("INVALID_EMAIL", "Invalid email format"),
    IdentityProviderError.WEAK_PASSWORD: Error("WEAK_PASSWORD", "Password is too weak"),
}


def build_verification_link(client_url: str, token: str) -> str:
    return f"{client_url.rstrip('/')}/verify-email?token={token}"


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Reject duplicate email, then duplicate mobile number
    2. Create the account at the identity provider (provider errors mapped)
    3. Hash password with bcrypt and persist the user, both flags false,
       with an email verification token valid for 24 hours
    4. Dispatch an SMS OTP (best-effort) and keep the provider handle
    5. Commit, then send the verification email (best-effort)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        identity_provider: IIdentityProvider,
        email_sender: IEmailSender,
        client_url: str,
    ):
        self.uow = uow
        self.identity_provider = identity_provider
        self.email_sender = email_sender
        self.client_url = client_url

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        async with self.uow:
            if await self.uow.users.email_exists(command.email):
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            if await self.uow.users.mobile_exists(command.mobile_no):
                return Return.err(
                    Error("MOBILE_ALREADY_EXISTS", "Mobile number already registered")
                )

            try:
                account = await self.identity_provider.create_account(
                    command.email, command.password, command.mobile_no
                )
            except IdentityProviderError as exc:
                logger.error(f"Identity provider account creation failed: {exc}")
                return Return.err(
                    _PROVIDER_ERRORS.get(
                        exc.code,
                        Error("IDENTITY_PROVIDER_ERROR", "Failed to create identity provider account"),
                    )
                )

            password_hash = bcrypt.hashpw(command.password.encode("utf-8"), bcrypt.gensalt(12))
            verification_token = secrets.token_urlsafe(32)

            user = User(
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                full_name=command.full_name,
                gender=command.gender,
                mobile_no=command.mobile_no,
                signup_type=command.signup_type,
                external_uid=account.uid,
                is_email_verified=False,
                is_mobile_verified=False,
                email_verification_token=verification_token,
                email_verification_expires_at=datetime.utcnow() + EMAIL_VERIFICATION_TTL,
            )
            user = await self.uow.users.create(user)

            user.mobile_verification_id = await run_best_effort(
                "send SMS OTP", self.identity_provider.send_sms_otp(command.mobile_no)
            )
            if user.mobile_verification_id is not None:
                await self.uow.users.update(user)

            await self.uow.commit()

            await run_best_effort(
                "send verification email",
                self.email_sender.send_verification_email(
                    user.email, build_verification_link(self.client_url, verification_token)
                ),
            )

            return Return.ok(
                RegisterResponse(
                    user_id=str(user.id),
                    email=user.email,
                    full_name=user.full_name,
                    mobile_no=user.mobile_no,
                    external_uid=account.uid,
                )
            )
