import logging
from uuid import UUID

from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ResendOtpUseCase:
    """Re-dispatch the SMS OTP for a user whose mobile is not yet verified."""

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(self, user_id: UUID) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.is_mobile_verified:
                return Return.err(Error("ALREADY_VERIFIED", "Mobile already verified"))

            try:
                verification_id = await self.identity_provider.send_sms_otp(user.mobile_no)
            except IdentityProviderError as exc:
                logger.error(f"OTP resend failed for user {user.id}: {exc}")
                return Return.err(Error("IDENTITY_PROVIDER_ERROR", "Failed to send OTP"))

            user.mobile_verification_id = verification_id
            await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(MessageResponse(message="OTP resent successfully"))
