from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from src.api.error import raise_for_error
from src.api.responses import ApiResponse, ok
from src.api.utils.auth import require_auth, require_company_owner
from src.api.utils.uploads import parse_social_links, read_image, require_image
from src.app.services.image_store import IImageStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.company import (
    CompanyDeleteResponse,
    CompanyFields,
    CompanyProfileResponse,
    DeleteCompanyImageUseCase,
    DeleteCompanyUseCase,
    GetCompanyUseCase,
    ImageDeleteResponse,
    ImageUploadResponse,
    RegisterCompanyUseCase,
    UpdateCompanyUseCase,
    UploadCompanyImageUseCase,
)
from src.app.use_cases.users import AuthenticatedPrincipal
from src.depends import get_config, get_image_store, get_unit_of_work
from src.domain.entities import ImageKind

router = APIRouter(prefix="/company", tags=["Company"])

WEBSITE_PATTERN = r"^(https?://)?[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+(:\d+)?(/\S*)?$"


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[CompanyProfileResponse],
)
async def register_company(
    company_name: str = Form(..., min_length=2, max_length=255),
    address: str = Form(..., min_length=1),
    city: str = Form(..., min_length=1, max_length=100),
    state: str = Form(..., min_length=1, max_length=100),
    country: str = Form(..., min_length=1, max_length=100),
    postal_code: str = Form(..., min_length=1, max_length=20),
    industry: str = Form(..., min_length=1, max_length=100),
    website: Optional[str] = Form(None, max_length=255, pattern=WEBSITE_PATTERN),
    founded_date: Optional[date] = Form(None),
    description: Optional[str] = Form(None, max_length=1000),
    social_links: Optional[str] = Form(None, description="JSON object of platform to URL"),
    logo: Optional[UploadFile] = File(None),
    banner: Optional[UploadFile] = File(None),
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
    image_store: IImageStore = Depends(get_image_store),
    config=Depends(get_config),
):
    """
    Register Company Profile

    Multipart form; logo and banner are optional.

    Raises:
        - 409 Conflict: Caller already has a profile, or the name is taken
        - 400 Bad Request: Invalid fields or image
        - 500 Internal Server Error: Image upload failed
    """
    fields = CompanyFields(
        company_name=company_name,
        address=address,
        city=city,
        state=state,
        country=country,
        postal_code=postal_code,
        industry=industry,
        website=website,
        founded_date=founded_date,
        description=description,
        social_links=parse_social_links(social_links),
    )
    logo_image = await read_image(logo, config.MAX_UPLOAD_BYTES)
    banner_image = await read_image(banner, config.MAX_UPLOAD_BYTES)

    use_case = RegisterCompanyUseCase(uow, image_store)
    result = await use_case.execute(UUID(principal.id), fields, logo_image, banner_image)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Company profile created successfully")


@router.get("/profile", response_model=ApiResponse[CompanyProfileResponse])
async def get_company_profile(
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetCompanyUseCase(uow).execute(UUID(principal.id))

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Company profile retrieved successfully")


@router.put("/profile", response_model=ApiResponse[CompanyProfileResponse])
async def update_company_profile(
    company_name: Optional[str] = Form(None, min_length=2, max_length=255),
    address: Optional[str] = Form(None, min_length=1),
    city: Optional[str] = Form(None, min_length=1, max_length=100),
    state: Optional[str] = Form(None, min_length=1, max_length=100),
    country: Optional[str] = Form(None, min_length=1, max_length=100),
    postal_code: Optional[str] = Form(None, min_length=1, max_length=20),
    industry: Optional[str] = Form(None, min_length=1, max_length=100),
    website: Optional[str] = Form(None, max_length=255, pattern=WEBSITE_PATTERN),
    founded_date: Optional[date] = Form(None),
    description: Optional[str] = Form(None, max_length=1000),
    social_links: Optional[str] = Form(None, description="JSON object of platform to URL"),
    logo: Optional[UploadFile] = File(None),
    banner: Optional[UploadFile] = File(None),
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
    image_store: IImageStore = Depends(get_image_store),
    config=Depends(get_config),
):
    """
    Update Company Profile

    Only supplied fields change. New images replace the old ones.

    Raises:
        - 404 Not Found: Caller has no profile
        - 409 Conflict: New company name is taken
        - 400 Bad Request: Nothing to update, or invalid image
    """
    patch = {
        "company_name": company_name,
        "address": address,
        "city": city,
        "state": state,
        "country": country,
        "postal_code": postal_code,
        "industry": industry,
        "website": website,
        "founded_date": founded_date,
        "description": description,
        "social_links": parse_social_links(social_links),
    }
    logo_image = await read_image(logo, config.MAX_UPLOAD_BYTES)
    banner_image = await read_image(banner, config.MAX_UPLOAD_BYTES)

    use_case = UpdateCompanyUseCase(uow, image_store)
    result = await use_case.execute(UUID(principal.id), patch, logo_image, banner_image)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Company profile updated successfully")


@router.delete("/profile/{company_id}", response_model=ApiResponse[CompanyDeleteResponse])
async def delete_company_profile(
    company_id: UUID,
    principal: AuthenticatedPrincipal = Depends(require_auth),
    owned_company_id: UUID = Depends(require_company_owner),
    uow: UnitOfWork = Depends(get_unit_of_work),
    image_store: IImageStore = Depends(get_image_store),
):
    use_case = DeleteCompanyUseCase(uow, image_store)
    result = await use_case.execute(UUID(principal.id), company_id)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, "Company profile deleted successfully")


async def _upload(kind: ImageKind, file: Optional[UploadFile], principal, uow, image_store, config):
    image = await require_image(file, config.MAX_UPLOAD_BYTES)

    use_case = UploadCompanyImageUseCase(uow, image_store, kind)
    result = await use_case.execute(UUID(principal.id), image)

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, f"{kind.value.capitalize()} uploaded successfully")


@router.post("/upload-logo", response_model=ApiResponse[ImageUploadResponse])
async def upload_logo(
    logo: Optional[UploadFile] = File(None),
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
    image_store: IImageStore = Depends(get_image_store),
    config=Depends(get_config),
):
    return await _upload(ImageKind.logo, logo, principal, uow, image_store, config)


@router.post("/upload-banner", response_model=ApiResponse[ImageUploadResponse])
async def upload_banner(
    banner: Optional[UploadFile] = File(None),
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
    image_store: IImageStore = Depends(get_image_store),
    config=Depends(get_config),
):
    return await _upload(ImageKind.banner, banner, principal, uow, image_store, config)


async def _delete(kind: ImageKind, principal, uow, image_store):
    use_case = DeleteCompanyImageUseCase(uow, image_store, kind)
    result = await use_case.execute(UUID(principal.id))

    if result.is_err():
        raise_for_error(result.error)

    return ok(result.value, f"{kind.value.capitalize()} deleted successfully")


@router.delete("/logo", response_model=ApiResponse[ImageDeleteResponse])
async def delete_logo(
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
    image_store: IImageStore = Depends(get_image_store),
):
    return await _delete(ImageKind.logo, principal, uow, image_store)


@router.delete("/banner", response_model=ApiResponse[ImageDeleteResponse])
async def delete_banner(
    principal: AuthenticatedPrincipal = Depends(require_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
    image_store: IImageStore = Depends(get_image_store),
):
    return await _delete(ImageKind.banner, principal, uow, image_store)
