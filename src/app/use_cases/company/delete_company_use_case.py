from uuid import UUID

from src.app.services.image_store import IImageStore
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import CompanyDeleteResponse
from .images import discard_image


class DeleteCompanyUseCase:
    """
    Delete a company profile owned by the caller.

    The delete is scoped by (id, owner_id); images go best-effort afterwards.
    """

    def __init__(self, uow: UnitOfWork, image_store: IImageStore):
        self.uow = uow
        self.image_store = image_store

    async def execute(self, owner_id: UUID, company_id: UUID) -> Result[CompanyDeleteResponse]:
        async with self.uow:
            company = await self.uow.companies.get_by_id(company_id)
            if company is None or company.owner_id != owner_id:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company profile not found"))

            response = CompanyDeleteResponse(
                company_id=str(company.id), company_name=company.company_name
            )
            image_urls = (company.logo_url, company.banner_url)

            if not await self.uow.companies.delete_scoped(company_id, owner_id):
                return Return.err(Error("COMPANY_NOT_FOUND", "Company profile not found"))
            await self.uow.commit()

            for url in image_urls:
                await discard_image(self.image_store, url)

            return Return.ok(response)
