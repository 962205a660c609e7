from uuid import uuid4

import pytest

from src.app.use_cases.users import (
    GetProfileUseCase,
    LoadPrincipalUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.domain.entities import Gender
from tests.fixtures.entities import make_company, make_user


@pytest.mark.asyncio
async def test_load_principal(mock_uow):
    user = make_user(is_mobile_verified=True)
    mock_uow.users.get_by_id.return_value = user

    result = await LoadPrincipalUseCase(mock_uow).execute(user.id)

    assert result.is_ok()
    assert result.value.id == str(user.id)
    assert result.value.is_email_verified is True
    assert result.value.is_mobile_verified is True


@pytest.mark.asyncio
async def test_load_principal_for_deleted_user(mock_uow):
    result = await LoadPrincipalUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_profile_with_company(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    mock_uow.companies.get_by_owner_id.return_value = make_company(user.id)

    result = await GetProfileUseCase(mock_uow).execute(user.id)

    assert result.is_ok()
    assert result.value.user.email == user.email
    assert result.value.company.company_name == "Acme Corp"


@pytest.mark.asyncio
async def test_get_profile_without_company(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await GetProfileUseCase(mock_uow).execute(user.id)

    assert result.value.company is None


@pytest.mark.asyncio
async def test_update_profile_requires_a_field(mock_uow):
    result = await UpdateProfileUseCase(mock_uow).execute(uuid4(), UpdateProfileCommand())

    assert result.is_err()
    assert result.error.code == "NO_FIELDS_TO_UPDATE"


@pytest.mark.asyncio
async def test_update_profile_changes_name_and_gender(mock_uow):
    user = make_user(is_mobile_verified=True)
    mock_uow.users.get_by_id.return_value = user

    result = await UpdateProfileUseCase(mock_uow).execute(
        user.id, UpdateProfileCommand(full_name="Jane Smith", gender=Gender.other)
    )

    assert result.is_ok()
    assert result.value.full_name == "Jane Smith"
    assert result.value.gender == "o"
    assert user.is_mobile_verified is True
    mock_uow.users.mobile_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_profile_new_mobile_clears_verification(mock_uow):
    user = make_user(is_mobile_verified=True)
    mock_uow.users.get_by_id.return_value = user

    result = await UpdateProfileUseCase(mock_uow).execute(
        user.id, UpdateProfileCommand(mobile_no="+919000000001")
    )

    assert result.is_ok()
    assert user.mobile_no == "+919000000001"
    assert user.is_mobile_verified is False
    mock_uow.users.mobile_exists.assert_awaited_once_with("+919000000001", exclude_user_id=user.id)


@pytest.mark.asyncio
async def test_update_profile_mobile_taken(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    mock_uow.users.mobile_exists.return_value = True

    result = await UpdateProfileUseCase(mock_uow).execute(
        user.id, UpdateProfileCommand(mobile_no="+919000000001")
    )

    assert result.is_err()
    assert result.error.code == "MOBILE_ALREADY_EXISTS"
    mock_uow.commit.assert_not_awaited()
