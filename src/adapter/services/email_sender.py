"""Email senders - SMTP for real delivery, console logging for development."""

import logging
from email.message import EmailMessage

import aiosmtplib

from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)

APP_NAME = "Jobpilot"


def _verification_body(link: str) -> str:
    return (
        "Thank you for registering!\n\n"
        "Please open the link below to verify your email address:\n\n"
        f"{link}\n\n"
        "This link will expire in 24 hours.\n\n"
        "If you didn't create an account, please ignore this email.\n\n"
        f"The {APP_NAME} Team"
    )


def _reset_body(link: str) -> str:
    return (
        "We received a request to reset your password.\n\n"
        "Open the link below to choose a new password:\n\n"
        f"{link}\n\n"
        "If you didn't request a password reset, you can ignore this email.\n\n"
        f"The {APP_NAME} Team"
    )


class SmtpEmailSender(IEmailSender):
    """Sends transactional emails using the configured SMTP server."""

    def __init__(self, hostname: str, port: int, username: str, password: str, sender: str):
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender

    async def send_verification_email(self, to_email: str, verification_link: str) -> None:
        await self._send(to_email, f"Verify Your Email - {APP_NAME}", _verification_body(verification_link))

    async def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        await self._send(to_email, f"Reset Your Password - {APP_NAME}", _reset_body(reset_link))

    async def _send(self, to_email: str, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to_email
        msg.set_content(body)

        logger.info("Sending '%s' email to %s", subject, to_email)

        await aiosmtplib.send(
            msg,
            hostname=self.hostname,
            port=self.port,
            username=self.username or None,
            password=self.password or None,
            start_tls=True,
        )

        logger.info("Email sent to %s", to_email)


class ConsoleEmailSender(IEmailSender):
    """Logs emails instead of sending them."""

    async def send_verification_email(self, to_email: str, verification_link: str) -> None:
        logger.info("[DEV MODE] Verification email for %s: %s", to_email, verification_link)

    async def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        logger.info("[DEV MODE] Password reset email for %s: %s", to_email, reset_link)
