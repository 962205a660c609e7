"""
Verify Mobile Use Case

Confirms the user's mobile number with an SMS OTP checked by the
identity provider.
"""

import logging
from uuid import UUID

from src.app.services.identity_provider import IdentityProviderError, IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import VerifyMobileResponse

logger = logging.getLogger(__name__)


class VerifyMobileUseCase:
    """
    Business Rules:
    - Already verified users return success without checking the OTP
    - Any provider rejection (wrong or expired code, outage) is reported
      as an invalid OTP
    - On success is_mobile_verified is set and the provider handle cleared
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(self, user_id: UUID, otp: str) -> Result[VerifyMobileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.is_mobile_verified:
                return Return.ok(
                    VerifyMobileResponse(
                        user_id=str(user.id),
                        mobile_no=user.mobile_no,
                        is_mobile_verified=True,
                        message="Mobile already verified",
                    )
                )

            try:
                await self.identity_provider.verify_sms_otp(
                    user.mobile_verification_id or "", otp
                )
            except IdentityProviderError as exc:
                logger.info(f"OTP rejected for user {user.id}: {exc.code}")
                return Return.err(Error("INVALID_OTP", "Invalid or expired OTP"))

            user.is_mobile_verified = True
            user.mobile_verification_id = None
            await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(
                VerifyMobileResponse(
                    user_id=str(user.id),
                    mobile_no=user.mobile_no,
                    is_mobile_verified=True,
                    message="Mobile number verified successfully",
                )
            )
