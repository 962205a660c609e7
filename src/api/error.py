from typing import NoReturn

from fastapi import status

from src.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Error codes returned by use cases that are the caller's fault.
# Anything not listed here is reported as a server error.
CLIENT_ERROR_STATUS = {
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "MOBILE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "COMPANY_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "COMPANY_NAME_EXISTS": status.HTTP_409_CONFLICT,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "AUTH_SERVICE_ERROR": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "EMAIL_NOT_VERIFIED": status.HTTP_403_FORBIDDEN,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "COMPANY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "IMAGE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_EMAIL": status.HTTP_400_BAD_REQUEST,
    "WEAK_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "INVALID_OTP": status.HTTP_400_BAD_REQUEST,
    "ALREADY_VERIFIED": status.HTTP_400_BAD_REQUEST,
    "NO_FIELDS_TO_UPDATE": status.HTTP_400_BAD_REQUEST,
    "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
    "TOKEN_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "INVALID_IMAGE": status.HTTP_400_BAD_REQUEST,
    "INVALID_FILE": status.HTTP_400_BAD_REQUEST,
    "RATE_LIMITED": status.HTTP_429_TOO_MANY_REQUESTS,
}


def raise_for_error(error: Error) -> NoReturn:
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is not None:
        raise ClientError(error, status_code=status_code)
    raise ServerError(error)
