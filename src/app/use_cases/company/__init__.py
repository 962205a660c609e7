"""
Company Profile Use Cases

Registration, retrieval, update and image management of the caller's
company profile.
"""

from .register_company_use_case import RegisterCompanyUseCase
from .get_company_use_case import GetCompanyUseCase
from .update_company_use_case import UpdateCompanyUseCase
from .upload_company_image_use_case import UploadCompanyImageUseCase
from .delete_company_image_use_case import DeleteCompanyImageUseCase
from .delete_company_use_case import DeleteCompanyUseCase
from .dtos import (
    CompanyDeleteResponse,
    CompanyFields,
    CompanyProfileResponse,
    ImageDeleteResponse,
    ImageUpload,
    ImageUploadResponse,
)

__all__ = [
    "RegisterCompanyUseCase",
    "GetCompanyUseCase",
    "UpdateCompanyUseCase",
    "UploadCompanyImageUseCase",
    "DeleteCompanyImageUseCase",
    "DeleteCompanyUseCase",
    "CompanyDeleteResponse",
    "CompanyFields",
    "CompanyProfileResponse",
    "ImageDeleteResponse",
    "ImageUpload",
    "ImageUploadResponse",
]
