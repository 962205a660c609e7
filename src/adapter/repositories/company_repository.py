from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.company_repository import ICompanyRepository
from src.domain.entities import CompanyProfile, UPDATABLE_FIELDS


class CompanyRepository(ICompanyRepository):
    """Company profile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_owner_id(self, owner_id: UUID) -> Optional[CompanyProfile]:
        stmt = select(CompanyProfile).where(CompanyProfile.owner_id == owner_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, company_id: UUID) -> Optional[CompanyProfile]:
        stmt = select(CompanyProfile).where(CompanyProfile.id == company_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def name_exists(
        self, company_name: str, exclude_company_id: Optional[UUID] = None
    ) -> bool:
        stmt = select(CompanyProfile.id).where(
            CompanyProfile.company_name == company_name
        )
        if exclude_company_id is not None:
            stmt = stmt.where(CompanyProfile.id != exclude_company_id)
        result = await self.session.exec(stmt.limit(1))
        return result.first() is not None

    async def create(self, company: CompanyProfile) -> CompanyProfile:
        self.session.add(company)
        await self.session.flush()
        await self.session.refresh(company)
        return company

    async def update_scoped(
        self, company_id: UUID, owner_id: UUID, values: Dict[str, Any]
    ) -> Optional[CompanyProfile]:
        allowed = {k: v for k, v in values.items() if k in UPDATABLE_FIELDS}
        allowed["updated_at"] = datetime.utcnow()

        stmt = (
            update(CompanyProfile)
            .where(CompanyProfile.id == company_id)
            .where(CompanyProfile.owner_id == owner_id)
            .values(**allowed)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None

        refreshed = await self.session.exec(
            select(CompanyProfile)
            .where(CompanyProfile.id == company_id)
            .execution_options(populate_existing=True)
        )
        return refreshed.one()

    async def delete_scoped(self, company_id: UUID, owner_id: UUID) -> bool:
        stmt = (
            delete(CompanyProfile)
            .where(CompanyProfile.id == company_id)
            .where(CompanyProfile.owner_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
