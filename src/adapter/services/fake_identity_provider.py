"""
In-process identity provider used for development and relaxed mode.

Accounts are not stored anywhere; OTP checks accept a single configured
code so flows can be exercised without SMS delivery.
"""

import logging
from urllib.parse import urlencode
from uuid import uuid4

from src.app.services.identity_provider import (
    ExternalAccount,
    IdentityProviderError,
    IIdentityProvider,
)

logger = logging.getLogger(__name__)

MOCK_VERIFICATION_ID = "mock-verification-id"


class FakeIdentityProvider(IIdentityProvider):
    def __init__(self, otp_code: str = "123456", client_url: str = "http://localhost:4173"):
        self.otp_code = otp_code
        self.client_url = client_url.rstrip("/")

    async def create_account(
        self, email: str, password: str, phone_number: str
    ) -> ExternalAccount:
        # Same minimum as the real provider so dev and prod reject alike
        if len(password) < 6:
            raise IdentityProviderError(
                IdentityProviderError.WEAK_PASSWORD,
                "Password should be at least 6 characters",
            )
        uid = f"mock-uid-{uuid4().hex}"
        logger.info(f"Mock account created for {email}: {uid}")
        return ExternalAccount(uid=uid, email=email)

    async def verify_credentials(self, email: str, password: str) -> ExternalAccount:
        return ExternalAccount(uid=f"mock-uid-{email}", email=email)

    async def send_sms_otp(self, phone_number: str) -> str:
        logger.info(f"Mock OTP sent to {phone_number}: {self.otp_code}")
        return MOCK_VERIFICATION_ID

    async def verify_sms_otp(self, verification_id: str, otp: str) -> None:
        if otp != self.otp_code:
            raise IdentityProviderError(IdentityProviderError.INVALID_OTP, "Invalid OTP")

    async def generate_password_reset_link(self, email: str) -> str:
        query = urlencode({"email": email, "oobCode": uuid4().hex})
        return f"{self.client_url}/reset-password?{query}"

    async def update_password(self, email: str, new_password: str) -> None:
        logger.info(f"Mock password sync for {email}")
