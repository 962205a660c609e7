"""
Request gateway dependencies.

Every protected route resolves the caller from a Bearer token, reloads
the user, and applies the verification gate.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, status

from src.api.error import ClientError
from src.api.utils.jwt import extract_bearer_token, verify_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.company import GetCompanyUseCase
from src.app.use_cases.users import AuthenticatedPrincipal, LoadPrincipalUseCase
from src.depends import get_config, get_unit_of_work
from src.libs.result import Error

logger = logging.getLogger(__name__)


def _unauthorized(message: str) -> ClientError:
    return ClientError(Error("UNAUTHORIZED", message), status_code=status.HTTP_401_UNAUTHORIZED)


async def authenticate(request: Request, uow: UnitOfWork) -> AuthenticatedPrincipal:
    """
    Resolve the principal from the Authorization header.

    Raises:
        ClientError: 401 when the token is missing, invalid, expired, or
            names a user that no longer exists
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise _unauthorized("Access token is required")

    payload = verify_jwt(token)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = UUID(payload.get("user_id"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid or expired token")

    result = await LoadPrincipalUseCase(uow).execute(user_id)
    if result.is_err():
        logger.info(f"Token presented for unknown user {user_id}")
        raise _unauthorized("User not found")

    return result.value


class RequireAuth:
    """
    Dependency guarding a protected route.

    With require_verified_email, callers whose email is unverified are
    rejected with 403 unless the application runs in relaxed mode.
    """

    def __init__(self, require_verified_email: bool = True):
        self.require_verified_email = require_verified_email

    async def __call__(
        self,
        request: Request,
        uow: UnitOfWork = Depends(get_unit_of_work),
        config=Depends(get_config),
    ) -> AuthenticatedPrincipal:
        principal = await authenticate(request, uow)

        if (
            self.require_verified_email
            and not config.RELAXED_MODE
            and not principal.is_email_verified
        ):
            raise ClientError(
                Error("EMAIL_NOT_VERIFIED", "Please verify your email address to continue"),
                status_code=status.HTTP_403_FORBIDDEN,
            )

        request.state.principal = principal
        return principal


require_auth = RequireAuth()
require_profile_access = RequireAuth(require_verified_email=False)


async def optional_auth(
    request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
) -> Optional[AuthenticatedPrincipal]:
    """Same checks as require_auth, but an anonymous caller is not an error."""
    try:
        principal = await authenticate(request, uow)
    except ClientError:
        return None
    request.state.principal = principal
    return principal


async def require_company_owner(
    request: Request,
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> UUID:
    """Resolve the caller's own company id; 404 when they have none."""
    result = await GetCompanyUseCase(uow).execute(UUID(principal.id))
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)

    company_id = UUID(result.value.id)
    request.state.company_id = company_id
    return company_id
