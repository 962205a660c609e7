"""
Upload Company Image Use Case

Sets the logo or banner of the caller's company profile.
"""

from uuid import UUID

from src.app.services.image_store import IImageStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import CompanyProfile, ImageKind
from src.libs.result import Error, Result, Return
from .dtos import ImageUpload, ImageUploadResponse
from .images import discard_image, upload_image

PLACEHOLDER_NAME = "Unnamed Company"
PLACEHOLDER_TEXT = "To be updated"


class UploadCompanyImageUseCase:
    """
    Business Rules:
    - The image is uploaded before anything is written
    - Without a profile, a placeholder profile is created to hold the image
    - The previous image of the same kind is deleted best-effort
    """

    def __init__(self, uow: UnitOfWork, image_store: IImageStore, kind: ImageKind):
        self.uow = uow
        self.image_store = image_store
        self.kind = kind

    async def execute(self, owner_id: UUID, image: ImageUpload) -> Result[ImageUploadResponse]:
        uploaded = await upload_image(self.image_store, self.kind, image)
        if uploaded.is_err():
            return Return.err(uploaded.error)
        stored = uploaded.value

        async with self.uow:
            existing = await self.uow.companies.get_by_owner_id(owner_id)
            old_url = None

            if existing is not None:
                old_url = getattr(existing, self.kind.url_field)
                company = await self.uow.companies.update_scoped(
                    existing.id, owner_id, {self.kind.url_field: stored.url}
                )
                if company is None:
                    return Return.err(Error("COMPANY_NOT_FOUND", "Company profile not found"))
            else:
                company = await self.uow.companies.create(
                    await self._placeholder(owner_id, stored.url)
                )

            await self.uow.commit()

            await discard_image(self.image_store, old_url)

            return Return.ok(
                ImageUploadResponse(
                    url=stored.url, public_id=stored.public_id, company_id=str(company.id)
                )
            )

    async def _placeholder(self, owner_id: UUID, url: str) -> CompanyProfile:
        name = PLACEHOLDER_NAME
        if await self.uow.companies.name_exists(name):
            name = f"{PLACEHOLDER_NAME} {owner_id.hex[:8]}"
        return CompanyProfile(
            owner_id=owner_id,
            company_name=name,
            address=PLACEHOLDER_TEXT,
            city=PLACEHOLDER_TEXT,
            state=PLACEHOLDER_TEXT,
            country=PLACEHOLDER_TEXT,
            postal_code="000000",
            industry="Other",
            **{self.kind.url_field: url},
        )
