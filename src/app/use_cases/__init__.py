"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, verification and password reset
- users/: Principal resolution and the user's own profile
- company/: Company profile and its images
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    RegisterResponse,
    LoginUseCase,
    VerifyEmailUseCase,
    VerifyMobileUseCase,
    ResendVerificationUseCase,
    ResendOtpUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
)
from .users import (
    LoadPrincipalUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from .company import (
    RegisterCompanyUseCase,
    GetCompanyUseCase,
    UpdateCompanyUseCase,
    DeleteCompanyUseCase,
    UploadCompanyImageUseCase,
    DeleteCompanyImageUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "RegisterResponse",
    "LoginUseCase",
    "VerifyEmailUseCase",
    "VerifyMobileUseCase",
    "ResendVerificationUseCase",
    "ResendOtpUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # Users
    "LoadPrincipalUseCase",
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    # Company
    "RegisterCompanyUseCase",
    "GetCompanyUseCase",
    "UpdateCompanyUseCase",
    "DeleteCompanyUseCase",
    "UploadCompanyImageUseCase",
    "DeleteCompanyImageUseCase",
]
