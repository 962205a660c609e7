"""
Company Profile Use Case DTOs
"""

from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from src.domain.entities import CompanyProfile


class CompanyFields(BaseModel):
    """Fields required to register a company profile"""

    company_name: str
    address: str
    city: str
    state: str
    country: str
    postal_code: str
    industry: str
    website: Optional[str] = None
    founded_date: Optional[date] = None
    description: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None


class ImageUpload(BaseModel):
    """Binary image already read from the request"""

    content: bytes
    filename: str
    content_type: str


class CompanyProfileResponse(BaseModel):
    id: str
    owner_id: str
    company_name: str
    address: str
    city: str
    state: str
    country: str
    postal_code: str
    website: Optional[str]
    logo_url: Optional[str]
    banner_url: Optional[str]
    industry: str
    founded_date: Optional[date]
    description: Optional[str]
    social_links: Optional[Dict[str, Any]]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, company: CompanyProfile) -> "CompanyProfileResponse":
        return cls(
            id=str(company.id),
            owner_id=str(company.owner_id),
            company_name=company.company_name,
            address=company.address,
            city=company.city,
            state=company.state,
            country=company.country,
            postal_code=company.postal_code,
            website=company.website,
            logo_url=company.logo_url,
            banner_url=company.banner_url,
            industry=company.industry,
            founded_date=company.founded_date,
            description=company.description,
            social_links=company.social_links,
            created_at=company.created_at,
            updated_at=company.updated_at,
        )


class ImageUploadResponse(BaseModel):
    url: str
    public_id: str
    company_id: str


class ImageDeleteResponse(BaseModel):
    company_id: str


class CompanyDeleteResponse(BaseModel):
    company_id: str
    company_name: str
