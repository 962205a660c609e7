"""
Update Company Use Case

Patches the caller's company profile and swaps images.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.image_store import IImageStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ImageKind, UPDATABLE_FIELDS
from src.libs.result import Error, Result, Return
from .dtos import CompanyProfileResponse, ImageUpload
from .images import discard_image, upload_image

# Image URLs only ever come from the image store, never from the client
PATCHABLE_FIELDS = tuple(
    f for f in UPDATABLE_FIELDS if f not in (ImageKind.logo.url_field, ImageKind.banner.url_field)
)


class UpdateCompanyUseCase:
    """
    Business Rules:
    - Unknown patch keys are dropped silently
    - A changed company name must not be used by another profile
    - New images are uploaded first; old images are deleted best-effort
      once the update is committed
    - The update is scoped by (id, owner_id); no matching row means
      COMPANY_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork, image_store: IImageStore):
        self.uow = uow
        self.image_store = image_store

    async def execute(
        self,
        owner_id: UUID,
        patch: Dict[str, Any],
        logo: Optional[ImageUpload] = None,
        banner: Optional[ImageUpload] = None,
    ) -> Result[CompanyProfileResponse]:
        async with self.uow:
            existing = await self.uow.companies.get_by_owner_id(owner_id)
            if existing is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company profile not found"))

            values = {k: v for k, v in patch.items() if k in PATCHABLE_FIELDS and v is not None}

            new_name = values.get("company_name")
            if new_name is not None and new_name != existing.company_name:
                if await self.uow.companies.name_exists(new_name, exclude_company_id=existing.id):
                    return Return.err(Error("COMPANY_NAME_EXISTS", "Company name already exists"))

            if not values and logo is None and banner is None:
                return Return.err(Error("NO_FIELDS_TO_UPDATE", "No valid fields to update"))

            replaced_urls = []
            for kind, image in ((ImageKind.logo, logo), (ImageKind.banner, banner)):
                if image is None:
                    continue
                uploaded = await upload_image(self.image_store, kind, image)
                if uploaded.is_err():
                    for field in (ImageKind.logo.url_field, ImageKind.banner.url_field):
                        await discard_image(self.image_store, values.get(field))
                    return Return.err(uploaded.error)
                values[kind.url_field] = uploaded.value.url
                replaced_urls.append(getattr(existing, kind.url_field))

            updated = await self.uow.companies.update_scoped(existing.id, owner_id, values)
            if updated is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company profile not found"))
            await self.uow.commit()

            for url in replaced_urls:
                await discard_image(self.image_store, url)

            return Return.ok(CompanyProfileResponse.from_entity(updated))
