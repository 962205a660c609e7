"""
Login Use Case

Handles user authentication and returns a session token.
"""

import logging

import bcrypt

from src.api.utils.jwt import generate_jwt
from src.app.services.best_effort import run_best_effort
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import LoginResponse, LoginUserInfo, UserInfo

logger = logging.getLogger(__name__)

# Hash of a throwaway password, checked when the email is unknown so both
# failure paths spend the same bcrypt time.
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email and wrong password return the same error
    - Email must be verified, unless running in relaxed mode
    - Credentials are re-checked at the identity provider; a provider
      failure rejects the login outside relaxed mode
    - Token carries user_id and email
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider, relaxed_mode: bool = False):
        self.uow = uow
        self.identity_provider = identity_provider
        self.relaxed_mode = relaxed_mode

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the token and user, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not user.is_email_verified and not self.relaxed_mode:
                return Return.err(Error("EMAIL_NOT_VERIFIED", "Please verify your email first"))

            account = await run_best_effort(
                "verify provider credentials",
                self.identity_provider.verify_credentials(user.email, password),
            )
            if account is None and not self.relaxed_mode:
                return Return.err(Error("AUTH_SERVICE_ERROR", "Authentication service error"))

            company = await self.uow.companies.get_by_owner_id(user.id)

            token = generate_jwt(user.id, user.email)
            logger.info(f"User {user.id} logged in")

            return Return.ok(
                LoginResponse(
                    token=token,
                    user=LoginUserInfo(
                        **UserInfo.from_user(user).model_dump(),
                        has_company=company is not None,
                    ),
                )
            )
