from uuid import UUID

from src.app.services.image_store import IImageStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ImageKind
from src.libs.result import Error, Result, Return
from .dtos import ImageDeleteResponse
from .images import discard_image


class DeleteCompanyImageUseCase:
    """
    Remove the logo or banner of the caller's profile.

    The stored image is deleted best-effort; the URL is cleared either way.
    """

    def __init__(self, uow: UnitOfWork, image_store: IImageStore, kind: ImageKind):
        self.uow = uow
        self.image_store = image_store
        self.kind = kind

    async def execute(self, owner_id: UUID) -> Result[ImageDeleteResponse]:
        async with self.uow:
            existing = await self.uow.companies.get_by_owner_id(owner_id)
            if existing is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company profile not found"))

            url = getattr(existing, self.kind.url_field)
            if not url:
                return Return.err(
                    Error("IMAGE_NOT_FOUND", f"No {self.kind.value} found to delete")
                )

            await discard_image(self.image_store, url)

            company = await self.uow.companies.update_scoped(
                existing.id, owner_id, {self.kind.url_field: None}
            )
            if company is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company profile not found"))
            await self.uow.commit()

            return Return.ok(ImageDeleteResponse(company_id=str(company.id)))
