from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import CompanyProfileResponse


class GetCompanyUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, owner_id: UUID) -> Result[CompanyProfileResponse]:
        async with self.uow:
            company = await self.uow.companies.get_by_owner_id(owner_id)
            if company is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company profile not found"))
            return Return.ok(CompanyProfileResponse.from_entity(company))
