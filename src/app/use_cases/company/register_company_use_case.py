"""
Register Company Use Case

Creates the caller's company profile, optionally with logo and banner.
"""

from typing import Optional
from uuid import UUID

from src.app.services.image_store import IImageStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import CompanyProfile, ImageKind
from src.libs.result import Error, Result, Return
from .dtos import CompanyFields, CompanyProfileResponse, ImageUpload
from .images import discard_image, upload_image


class RegisterCompanyUseCase:
    """
    Business Rules:
    - One profile per owner
    - Company name unique across all profiles
    - Images are uploaded before the row is written; a failed upload
      aborts the registration and no row is created
    """

    def __init__(self, uow: UnitOfWork, image_store: IImageStore):
        self.uow = uow
        self.image_store = image_store

    async def execute(
        self,
        owner_id: UUID,
        fields: CompanyFields,
        logo: Optional[ImageUpload] = None,
        banner: Optional[ImageUpload] = None,
    ) -> Result[CompanyProfileResponse]:
        async with self.uow:
            if await self.uow.companies.get_by_owner_id(owner_id) is not None:
                return Return.err(
                    Error("COMPANY_ALREADY_EXISTS", "Company profile already exists for this user")
                )

            if await self.uow.companies.name_exists(fields.company_name):
                return Return.err(Error("COMPANY_NAME_EXISTS", "Company name already exists"))

            image_urls = {}
            for kind, image in ((ImageKind.logo, logo), (ImageKind.banner, banner)):
                if image is None:
                    continue
                uploaded = await upload_image(self.image_store, kind, image)
                if uploaded.is_err():
                    for url in image_urls.values():
                        await discard_image(self.image_store, url)
                    return Return.err(uploaded.error)
                image_urls[kind.url_field] = uploaded.value.url

            company = CompanyProfile(owner_id=owner_id, **fields.model_dump(), **image_urls)
            company = await self.uow.companies.create(company)
            await self.uow.commit()

            return Return.ok(CompanyProfileResponse.from_entity(company))
