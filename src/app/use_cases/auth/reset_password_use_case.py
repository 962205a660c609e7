import bcrypt

from src.app.services.best_effort import run_best_effort
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse


class ResetPasswordUseCase:
    """
    Use case for setting a new password.

    Business Rules:
    - Unknown email returns USER_NOT_FOUND
    - Password is hashed with bcrypt before storing
    - The identity provider is told about the new password best-effort
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(self, email: str, new_password: str) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))
            user.password_hash = password_hash.decode()
            await self.uow.users.update(user)
            await self.uow.commit()

            await run_best_effort(
                "sync provider password",
                self.identity_provider.update_password(user.email, new_password),
            )

            return Return.ok(MessageResponse(message="Password reset complete."))
