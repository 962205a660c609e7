"""
User Entity

Represents a person who signs in and owns at most one company profile.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import Gender, SignupType


class User(SQLModel, table=True):
    """
    User entity - identity record.

    Business Rules:
    - Email must be unique across all users (stored lower-cased)
    - Mobile number must be unique across all users
    - Password stored as bcrypt hash, never returned to clients
    - Email is confirmed by a stored single-use token (24 hour expiry)
    - Mobile is confirmed by an OTP delegated to the identity provider;
      only the provider's verification handle is kept here
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    full_name: str = Field(max_length=255)
    gender: Gender
    mobile_no: str = Field(unique=True, index=True, max_length=20)
    signup_type: SignupType = Field(default=SignupType.email)

    external_uid: Optional[str] = Field(default=None, max_length=128)

    is_email_verified: bool = Field(default=False)
    is_mobile_verified: bool = Field(default=False)

    email_verification_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    email_verification_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    mobile_verification_id: Optional[str] = Field(default=None, max_length=255)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_email_verified", "is_email_verified"),)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
