from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.entities import CompanyProfile


class ICompanyRepository(ABC):
    """Company profile repository interface - application layer"""

    @abstractmethod
    async def get_by_owner_id(self, owner_id: UUID) -> Optional[CompanyProfile]:
        """Get the profile owned by a user"""
        pass

    @abstractmethod
    async def get_by_id(self, company_id: UUID) -> Optional[CompanyProfile]:
        """Get profile by ID"""
        pass

    @abstractmethod
    async def name_exists(
        self, company_name: str, exclude_company_id: Optional[UUID] = None
    ) -> bool:
        """Check whether another profile already uses this name"""
        pass

    @abstractmethod
    async def create(self, company: CompanyProfile) -> CompanyProfile:
        """Create a new profile"""
        pass

    @abstractmethod
    async def update_scoped(
        self, company_id: UUID, owner_id: UUID, values: Dict[str, Any]
    ) -> Optional[CompanyProfile]:
        """
        Update allow-listed fields of the profile matching (id, owner_id).

        Returns None when no row matched, i.e. the profile does not exist
        or belongs to someone else.
        """
        pass

    @abstractmethod
    async def delete_scoped(self, company_id: UUID, owner_id: UUID) -> bool:
        """Delete the profile matching (id, owner_id); False if no row matched"""
        pass
