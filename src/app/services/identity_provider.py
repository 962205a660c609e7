"""
Identity Provider Port

Third-party account, SMS OTP and password-reset service. Two adapters
exist (real Firebase and an in-process fake); which one is used is
decided once at startup from configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class IdentityProviderError(Exception):
    """Raised by providers with a provider-neutral error code."""

    EMAIL_EXISTS = "EMAIL_EXISTS"
    PHONE_EXISTS = "PHONE_EXISTS"
    INVALID_EMAIL = "INVALID_EMAIL"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_OTP = "INVALID_OTP"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    UNAVAILABLE = "UNAVAILABLE"

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


@dataclass
class ExternalAccount:
    uid: str
    email: str


class IIdentityProvider(ABC):
    async def startup(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def create_account(
        self, email: str, password: str, phone_number: str
    ) -> ExternalAccount:
        pass

    @abstractmethod
    async def verify_credentials(self, email: str, password: str) -> ExternalAccount:
        pass

    @abstractmethod
    async def send_sms_otp(self, phone_number: str) -> str:
        """Dispatch an OTP and return the provider's verification handle"""
        pass

    @abstractmethod
    async def verify_sms_otp(self, verification_id: str, otp: str) -> None:
        """Raise IdentityProviderError(INVALID_OTP) when the code is rejected"""
        pass

    @abstractmethod
    async def generate_password_reset_link(self, email: str) -> str:
        pass

    @abstractmethod
    async def update_password(self, email: str, new_password: str) -> None:
        pass
