from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.auth.dtos import UserInfo
from src.app.use_cases.company.dtos import CompanyProfileResponse
from src.domain.entities import Gender


class AuthenticatedPrincipal(BaseModel):
    """Identity attached to a request after token verification"""

    id: str
    email: str
    is_email_verified: bool
    is_mobile_verified: bool


class ProfileResponse(BaseModel):
    user: UserInfo
    company: Optional[CompanyProfileResponse]


class UpdateProfileCommand(BaseModel):
    full_name: Optional[str] = None
    gender: Optional[Gender] = None
    mobile_no: Optional[str] = None
