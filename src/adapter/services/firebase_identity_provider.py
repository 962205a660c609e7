"""
Firebase identity provider.

Account management goes through the Firebase Admin SDK (blocking calls,
run in the threadpool). Phone verification is not part of the Admin SDK,
so OTP dispatch and confirmation use the Identity Toolkit REST API.
"""

import logging
from typing import Optional

import firebase_admin
import httpx
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool

from src.app.services.identity_provider import (
    ExternalAccount,
    IdentityProviderError,
    IIdentityProvider,
)

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"


class FirebaseIdentityProvider(IIdentityProvider):
    def __init__(self, credentials_file: str, api_key: str, timeout: float = 30.0):
        self.credentials_file = credentials_file
        self.api_key = api_key
        self.timeout = timeout
        self._app: Optional[firebase_admin.App] = None
        self._client: Optional[httpx.AsyncClient] = None

    async def startup(self) -> None:
        cred = credentials.Certificate(self.credentials_file)
        self._app = firebase_admin.initialize_app(cred, name="identity")
        self._client = httpx.AsyncClient(base_url=IDENTITY_TOOLKIT_URL, timeout=self.timeout)
        logger.info("Firebase Admin SDK initialized")

    async def shutdown(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None

    async def create_account(
        self, email: str, password: str, phone_number: str
    ) -> ExternalAccount:
        try:
            record = await run_in_threadpool(
                firebase_auth.create_user,
                email=email,
                password=password,
                phone_number=phone_number,
                email_verified=False,
                disabled=False,
                app=self._app,
            )
        except firebase_auth.EmailAlreadyExistsError as exc:
            raise IdentityProviderError(IdentityProviderError.EMAIL_EXISTS, str(exc))
        except firebase_auth.PhoneNumberAlreadyExistsError as exc:
            raise IdentityProviderError(IdentityProviderError.PHONE_EXISTS, str(exc))
        except ValueError as exc:
            # The SDK validates arguments locally before calling the backend
            message = str(exc)
            if "password" in message.lower():
                raise IdentityProviderError(IdentityProviderError.WEAK_PASSWORD, message)
            if "email" in message.lower():
                raise IdentityProviderError(IdentityProviderError.INVALID_EMAIL, message)
            raise IdentityProviderError(IdentityProviderError.UNAVAILABLE, message)
        except FirebaseError as exc:
            logger.error(f"Firebase create_user error: {exc}")
            raise IdentityProviderError(IdentityProviderError.UNAVAILABLE, str(exc))
        return ExternalAccount(uid=record.uid, email=record.email)

    async def verify_credentials(self, email: str, password: str) -> ExternalAccount:
        data = await self._post("/accounts:signInWithPassword", {
            "email": email,
            "password": password,
            "returnSecureToken": False,
        })
        return ExternalAccount(uid=data["localId"], email=data.get("email", email))

    async def send_sms_otp(self, phone_number: str) -> str:
        data = await self._post("/accounts:sendVerificationCode", {"phoneNumber": phone_number})
        return data["sessionInfo"]

    async def verify_sms_otp(self, verification_id: str, otp: str) -> None:
        await self._post("/accounts:signInWithPhoneNumber", {
            "sessionInfo": verification_id,
            "code": otp,
        })

    async def generate_password_reset_link(self, email: str) -> str:
        try:
            return await run_in_threadpool(
                firebase_auth.generate_password_reset_link, email, app=self._app
            )
        except (FirebaseError, ValueError) as exc:
            raise IdentityProviderError(IdentityProviderError.UNAVAILABLE, str(exc))

    async def update_password(self, email: str, new_password: str) -> None:
        try:
            record = await run_in_threadpool(
                firebase_auth.get_user_by_email, email, app=self._app
            )
            await run_in_threadpool(
                firebase_auth.update_user, record.uid, password=new_password, app=self._app
            )
        except firebase_auth.UserNotFoundError as exc:
            raise IdentityProviderError(IdentityProviderError.USER_NOT_FOUND, str(exc))
        except (FirebaseError, ValueError) as exc:
            raise IdentityProviderError(IdentityProviderError.UNAVAILABLE, str(exc))

    async def _post(self, path: str, payload: dict) -> dict:
        try:
            resp = await self._client.post(path, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as exc:
            logger.error(f"Identity Toolkit request error: {exc}")
            raise IdentityProviderError(IdentityProviderError.UNAVAILABLE, str(exc))

        if resp.status_code == 200:
            return resp.json()

        message = resp.json().get("error", {}).get("message", resp.text)
        logger.warning(f"Identity Toolkit {path} failed: {resp.status_code} {message}")
        raise IdentityProviderError(_map_toolkit_error(message), message)


def _map_toolkit_error(message: str) -> str:
    # Toolkit messages look like "WEAK_PASSWORD : Password should be ..."
    code = message.split(":", 1)[0].strip()
    if code in ("INVALID_CODE", "SESSION_EXPIRED", "INVALID_SESSION_INFO", "CODE_EXPIRED"):
        return IdentityProviderError.INVALID_OTP
    if code in ("INVALID_PASSWORD", "EMAIL_NOT_FOUND", "INVALID_LOGIN_CREDENTIALS", "USER_DISABLED"):
        return IdentityProviderError.INVALID_CREDENTIALS
    if code == "EMAIL_EXISTS":
        return IdentityProviderError.EMAIL_EXISTS
    if code == "INVALID_EMAIL":
        return IdentityProviderError.INVALID_EMAIL
    if code == "WEAK_PASSWORD":
        return IdentityProviderError.WEAK_PASSWORD
    return IdentityProviderError.UNAVAILABLE
