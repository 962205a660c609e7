import logging
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from config import ApplicationConfig

logger = logging.getLogger(__name__)


def generate_jwt(user_id: UUID, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Generate session token

    Args:
        user_id: User UUID
        email: User email
        expires_delta: Token lifetime, defaults to JWT_EXPIRES_DAYS

    Returns:
        JWT token string (HS256)
    """
    if expires_delta is None:
        expires_delta = timedelta(days=ApplicationConfig.JWT_EXPIRES_DAYS)
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "email": email,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode session token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        return jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"])
    except ExpiredSignatureError:
        logger.info("Rejected expired token")
        return None
    except JWTError as exc:
        logger.info(f"Rejected malformed token: {exc}")
        return None


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) == 2 and parts[0] == "Bearer" and parts[1]:
        return parts[1]
    return None
