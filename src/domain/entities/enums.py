"""
Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class Gender(str, Enum):
    """User gender"""

    male = "m"
    female = "f"
    other = "o"


class SignupType(str, Enum):
    """Channel the account was created through"""

    email = "e"


class ImageKind(str, Enum):
    """Company image slots, each stored in its own folder"""

    logo = "logo"
    banner = "banner"

    @property
    def folder(self) -> str:
        return "company_logos" if self is ImageKind.logo else "company_banners"

    @property
    def url_field(self) -> str:
        return f"{self.value}_url"
