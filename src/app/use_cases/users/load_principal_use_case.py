"""
Load Principal Use Case

Re-resolves the user named by a verified session token.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import AuthenticatedPrincipal


class LoadPrincipalUseCase:
    """
    Business Rules:
    - Token claims are trusted only after signature/expiry checks
    - The user must still exist; tokens of removed users stop working
      even before they expire
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[AuthenticatedPrincipal]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                AuthenticatedPrincipal(
                    id=str(user.id),
                    email=user.email,
                    is_email_verified=user.is_email_verified,
                    is_mobile_verified=user.is_mobile_verified,
                )
            )
