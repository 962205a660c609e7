"""
CompanyProfile Entity

One company profile per owning user.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel


# Fields a profile update may touch; anything else in a patch is dropped.
UPDATABLE_FIELDS = (
    "company_name",
    "address",
    "city",
    "state",
    "country",
    "postal_code",
    "website",
    "logo_url",
    "banner_url",
    "industry",
    "founded_date",
    "description",
    "social_links",
)


class CompanyProfile(SQLModel, table=True):
    """
    CompanyProfile entity.

    Business Rules:
    - owner_id is unique: at most one profile per user
    - company_name is unique across all profiles (case-sensitive)
    - logo_url / banner_url are public URLs returned by the image store
    - Mutations are always scoped by (id, owner_id)
    """

    __tablename__ = "company_profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    company_name: str = Field(unique=True, index=True, max_length=255)
    address: str
    city: str = Field(max_length=100)
    state: str = Field(max_length=100)
    country: str = Field(max_length=100)
    postal_code: str = Field(max_length=20)
    website: Optional[str] = Field(default=None, max_length=255)
    logo_url: Optional[str] = Field(default=None, max_length=500)
    banner_url: Optional[str] = Field(default=None, max_length=500)
    industry: str = Field(max_length=100)
    founded_date: Optional[date] = None
    description: Optional[str] = None
    social_links: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
