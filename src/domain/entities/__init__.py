from .enums import Gender, ImageKind, SignupType
from .user import User
from .company_profile import CompanyProfile, UPDATABLE_FIELDS

__all__ = [
    # Enums
    "Gender",
    "ImageKind",
    "SignupType",
    # Entities
    "User",
    "CompanyProfile",
    "UPDATABLE_FIELDS",
]
