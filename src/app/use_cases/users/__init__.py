"""
User Use Cases

Principal resolution and the user's own profile.
"""

from .load_principal_use_case import LoadPrincipalUseCase
from .get_profile_use_case import GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .dtos import AuthenticatedPrincipal, ProfileResponse, UpdateProfileCommand

__all__ = [
    "LoadPrincipalUseCase",
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    "AuthenticatedPrincipal",
    "ProfileResponse",
    "UpdateProfileCommand",
]
