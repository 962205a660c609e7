from uuid import uuid4

import pytest

from src.app.services.image_store import ImageStoreError, StoredImage
from src.app.use_cases.company import (
    CompanyFields,
    DeleteCompanyImageUseCase,
    DeleteCompanyUseCase,
    GetCompanyUseCase,
    ImageUpload,
    RegisterCompanyUseCase,
    UpdateCompanyUseCase,
    UploadCompanyImageUseCase,
)
from src.domain.entities import ImageKind
from tests.fixtures.entities import make_company

LOGO_URL = "https://res.cloudinary.com/demo/image/upload/v1/logo123.png"
OLD_LOGO_URL = "https://res.cloudinary.com/demo/image/upload/v1/oldlogo.png"


def make_fields(**overrides) -> CompanyFields:
    values = dict(
        company_name="Acme Corp",
        address="1 Main Street",
        city="Pune",
        state="Maharashtra",
        country="India",
        postal_code="411001",
        industry="Software",
    )
    values.update(overrides)
    return CompanyFields(**values)


def make_image(name: str = "logo.png") -> ImageUpload:
    return ImageUpload(content=b"\x89PNG...", filename=name, content_type="image/png")


def scoped_update_applies(company):
    """update_scoped stub that applies values to the given row"""

    async def apply(company_id, owner_id, values):
        if company_id != company.id or owner_id != company.owner_id:
            return None
        for key, value in values.items():
            setattr(company, key, value)
        return company

    return apply


# Register


@pytest.mark.asyncio
async def test_register_company(mock_uow, image_store):
    owner_id = uuid4()

    result = await RegisterCompanyUseCase(mock_uow, image_store).execute(owner_id, make_fields())

    assert result.is_ok()
    assert result.value.owner_id == str(owner_id)
    assert result.value.logo_url is None
    assert result.value.website is None
    mock_uow.commit.assert_awaited_once()
    image_store.upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_company_uploads_images_to_folders(mock_uow, image_store):
    image_store.upload.side_effect = [
        StoredImage(url=LOGO_URL, public_id="logo123"),
        StoredImage(url="https://cdn/banner9.png", public_id="banner9"),
    ]

    result = await RegisterCompanyUseCase(mock_uow, image_store).execute(
        uuid4(), make_fields(), make_image(), make_image("banner.png")
    )

    assert result.is_ok()
    assert result.value.logo_url == LOGO_URL
    assert result.value.banner_url == "https://cdn/banner9.png"
    folders = [call.args[1] for call in image_store.upload.call_args_list]
    assert folders == ["company_logos", "company_banners"]


@pytest.mark.asyncio
async def test_register_company_twice(mock_uow, image_store):
    owner_id = uuid4()
    mock_uow.companies.get_by_owner_id.return_value = make_company(owner_id)

    result = await RegisterCompanyUseCase(mock_uow, image_store).execute(owner_id, make_fields())

    assert result.is_err()
    assert result.error.code == "COMPANY_ALREADY_EXISTS"
    mock_uow.companies.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_company_name_taken(mock_uow, image_store):
    mock_uow.companies.name_exists.return_value = True

    result = await RegisterCompanyUseCase(mock_uow, image_store).execute(uuid4(), make_fields())

    assert result.is_err()
    assert result.error.code == "COMPANY_NAME_EXISTS"


@pytest.mark.asyncio
async def test_register_company_upload_failure_aborts(mock_uow, image_store):
    """
    Given the image store is unreachable
    When a company registers with a logo
    Then no row is created
    """
    image_store.upload.side_effect = ImageStoreError(ImageStoreError.UNAVAILABLE, "timeout")

    result = await RegisterCompanyUseCase(mock_uow, image_store).execute(
        uuid4(), make_fields(), make_image()
    )

    assert result.is_err()
    assert result.error.code == "IMAGE_UPLOAD_FAILED"
    mock_uow.companies.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_company_banner_rejected_discards_logo(mock_uow, image_store):
    image_store.upload.side_effect = [
        StoredImage(url=LOGO_URL, public_id="logo123"),
        ImageStoreError(ImageStoreError.REJECTED, "bad format"),
    ]

    result = await RegisterCompanyUseCase(mock_uow, image_store).execute(
        uuid4(), make_fields(), make_image(), make_image("banner.gif")
    )

    assert result.error.code == "INVALID_IMAGE"
    image_store.delete.assert_awaited_once_with("logo123")
    mock_uow.companies.create.assert_not_awaited()


# Get


@pytest.mark.asyncio
async def test_get_company_missing(mock_uow):
    result = await GetCompanyUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "COMPANY_NOT_FOUND"


# Update


@pytest.mark.asyncio
async def test_update_company_drops_unknown_fields(mock_uow, image_store):
    company = make_company(uuid4())
    mock_uow.companies.get_by_owner_id.return_value = company
    mock_uow.companies.update_scoped.side_effect = scoped_update_applies(company)

    result = await UpdateCompanyUseCase(mock_uow, image_store).execute(
        company.owner_id,
        {"city": "Mumbai", "owner_id": str(uuid4()), "id": "x", "logo_url": "http://evil"},
    )

    assert result.is_ok()
    company_id, owner_id, values = mock_uow.companies.update_scoped.call_args.args
    assert (company_id, owner_id) == (company.id, company.owner_id)
    assert values == {"city": "Mumbai"}
    assert result.value.city == "Mumbai"


@pytest.mark.asyncio
async def test_update_company_without_changes(mock_uow, image_store):
    mock_uow.companies.get_by_owner_id.return_value = make_company(uuid4())

    result = await UpdateCompanyUseCase(mock_uow, image_store).execute(uuid4(), {"bogus": 1})

    assert result.is_err()
    assert result.error.code == "NO_FIELDS_TO_UPDATE"


@pytest.mark.asyncio
async def test_update_company_name_taken(mock_uow, image_store):
    company = make_company(uuid4())
    mock_uow.companies.get_by_owner_id.return_value = company
    mock_uow.companies.name_exists.return_value = True

    result = await UpdateCompanyUseCase(mock_uow, image_store).execute(
        company.owner_id, {"company_name": "Globex"}
    )

    assert result.error.code == "COMPANY_NAME_EXISTS"
    mock_uow.companies.name_exists.assert_awaited_once_with("Globex", exclude_company_id=company.id)


@pytest.mark.asyncio
async def test_update_company_same_name_skips_check(mock_uow, image_store):
    company = make_company(uuid4())
    mock_uow.companies.get_by_owner_id.return_value = company
    mock_uow.companies.update_scoped.side_effect = scoped_update_applies(company)

    result = await UpdateCompanyUseCase(mock_uow, image_store).execute(
        company.owner_id, {"company_name": "Acme Corp"}
    )

    assert result.is_ok()
    mock_uow.companies.name_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_company_zero_rows(mock_uow, image_store):
    """A scoped update that matches nothing is reported as not found"""
    mock_uow.companies.get_by_owner_id.return_value = make_company(uuid4())
    mock_uow.companies.update_scoped.return_value = None

    result = await UpdateCompanyUseCase(mock_uow, image_store).execute(uuid4(), {"city": "Mumbai"})

    assert result.error.code == "COMPANY_NOT_FOUND"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_company_replaces_logo(mock_uow, image_store):
    company = make_company(uuid4(), logo_url=OLD_LOGO_URL)
    mock_uow.companies.get_by_owner_id.return_value = company
    mock_uow.companies.update_scoped.side_effect = scoped_update_applies(company)
    image_store.upload.return_value = StoredImage(url=LOGO_URL, public_id="logo123")

    result = await UpdateCompanyUseCase(mock_uow, image_store).execute(
        company.owner_id, {}, logo=make_image()
    )

    assert result.is_ok()
    assert result.value.logo_url == LOGO_URL
    image_store.delete.assert_awaited_once_with("oldlogo")


@pytest.mark.asyncio
async def test_update_company_old_logo_delete_failure_ignored(mock_uow, image_store):
    company = make_company(uuid4(), logo_url=OLD_LOGO_URL)
    mock_uow.companies.get_by_owner_id.return_value = company
    mock_uow.companies.update_scoped.side_effect = scoped_update_applies(company)
    image_store.upload.return_value = StoredImage(url=LOGO_URL, public_id="logo123")
    image_store.delete.side_effect = ImageStoreError(ImageStoreError.UNAVAILABLE, "down")

    result = await UpdateCompanyUseCase(mock_uow, image_store).execute(
        company.owner_id, {}, logo=make_image()
    )

    assert result.is_ok()
    mock_uow.commit.assert_awaited_once()


# Upload / delete images


@pytest.mark.asyncio
async def test_upload_logo_creates_placeholder(mock_uow, image_store):
    owner_id = uuid4()
    image_store.upload.return_value = StoredImage(url=LOGO_URL, public_id="logo123")

    result = await UploadCompanyImageUseCase(mock_uow, image_store, ImageKind.logo).execute(
        owner_id, make_image()
    )

    assert result.is_ok()
    assert result.value.public_id == "logo123"
    placeholder = mock_uow.companies.create.call_args.args[0]
    assert placeholder.company_name == "Unnamed Company"
    assert placeholder.address == "To be updated"
    assert placeholder.postal_code == "000000"
    assert placeholder.industry == "Other"
    assert placeholder.logo_url == LOGO_URL
    assert result.value.company_id == str(placeholder.id)


@pytest.mark.asyncio
async def test_upload_logo_placeholder_name_taken(mock_uow, image_store):
    owner_id = uuid4()
    mock_uow.companies.name_exists.return_value = True
    image_store.upload.return_value = StoredImage(url=LOGO_URL, public_id="logo123")

    await UploadCompanyImageUseCase(mock_uow, image_store, ImageKind.logo).execute(
        owner_id, make_image()
    )

    placeholder = mock_uow.companies.create.call_args.args[0]
    assert placeholder.company_name == f"Unnamed Company {owner_id.hex[:8]}"


@pytest.mark.asyncio
async def test_upload_banner_replaces_existing(mock_uow, image_store):
    company = make_company(uuid4(), banner_url="https://cdn/x/v1/oldbanner.jpg")
    mock_uow.companies.get_by_owner_id.return_value = company
    mock_uow.companies.update_scoped.side_effect = scoped_update_applies(company)
    image_store.upload.return_value = StoredImage(url="https://cdn/x/v1/new.jpg", public_id="new")

    result = await UploadCompanyImageUseCase(mock_uow, image_store, ImageKind.banner).execute(
        company.owner_id, make_image("banner.jpg")
    )

    assert result.is_ok()
    assert company.banner_url == "https://cdn/x/v1/new.jpg"
    assert image_store.upload.call_args.args[1] == "company_banners"
    image_store.delete.assert_awaited_once_with("oldbanner")
    mock_uow.companies.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_upload_rejected_image(mock_uow, image_store):
    image_store.upload.side_effect = ImageStoreError(ImageStoreError.REJECTED, "gif not allowed")

    result = await UploadCompanyImageUseCase(mock_uow, image_store, ImageKind.logo).execute(
        uuid4(), make_image("anim.gif")
    )

    assert result.error.code == "INVALID_IMAGE"
    mock_uow.companies.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_logo(mock_uow, image_store):
    company = make_company(uuid4(), logo_url=OLD_LOGO_URL)
    mock_uow.companies.get_by_owner_id.return_value = company
    mock_uow.companies.update_scoped.side_effect = scoped_update_applies(company)

    result = await DeleteCompanyImageUseCase(mock_uow, image_store, ImageKind.logo).execute(
        company.owner_id
    )

    assert result.is_ok()
    assert company.logo_url is None
    image_store.delete.assert_awaited_once_with("oldlogo")


@pytest.mark.asyncio
async def test_delete_logo_store_failure_still_clears_field(mock_uow, image_store):
    company = make_company(uuid4(), logo_url=OLD_LOGO_URL)
    mock_uow.companies.get_by_owner_id.return_value = company
    mock_uow.companies.update_scoped.side_effect = scoped_update_applies(company)
    image_store.delete.side_effect = ImageStoreError(ImageStoreError.UNAVAILABLE, "down")

    result = await DeleteCompanyImageUseCase(mock_uow, image_store, ImageKind.logo).execute(
        company.owner_id
    )

    assert result.is_ok()
    assert company.logo_url is None


@pytest.mark.asyncio
async def test_delete_missing_banner(mock_uow, image_store):
    mock_uow.companies.get_by_owner_id.return_value = make_company(uuid4())

    result = await DeleteCompanyImageUseCase(mock_uow, image_store, ImageKind.banner).execute(
        uuid4()
    )

    assert result.error.code == "IMAGE_NOT_FOUND"
    image_store.delete.assert_not_awaited()


# Delete profile


@pytest.mark.asyncio
async def test_delete_company_of_other_owner(mock_uow, image_store):
    mock_uow.companies.get_by_id.return_value = make_company(uuid4())

    result = await DeleteCompanyUseCase(mock_uow, image_store).execute(uuid4(), uuid4())

    assert result.error.code == "COMPANY_NOT_FOUND"
    mock_uow.companies.delete_scoped.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_company_removes_images(mock_uow, image_store):
    company = make_company(uuid4(), logo_url=OLD_LOGO_URL, banner_url="https://cdn/v1/b1.jpg")
    mock_uow.companies.get_by_id.return_value = company

    result = await DeleteCompanyUseCase(mock_uow, image_store).execute(company.owner_id, company.id)

    assert result.is_ok()
    assert result.value.company_name == "Acme Corp"
    mock_uow.companies.delete_scoped.assert_awaited_once_with(company.id, company.owner_id)
    deleted = sorted(call.args[0] for call in image_store.delete.call_args_list)
    assert deleted == ["b1", "oldlogo"]
