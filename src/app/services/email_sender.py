from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Transactional mail: verification links and password reset links"""

    @abstractmethod
    async def send_verification_email(self, to_email: str, verification_link: str) -> None:
        pass

    @abstractmethod
    async def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        pass
