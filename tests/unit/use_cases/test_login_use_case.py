import pytest

from src.api.utils.jwt import verify_jwt
from src.app.services.identity_provider import ExternalAccount, IdentityProviderError
from src.app.use_cases.auth import LoginUseCase
from tests.fixtures.entities import TEST_PASSWORD, make_company, make_user


@pytest.mark.asyncio
async def test_successful_login(mock_uow, identity_provider):
    """
    Given a verified user
    When they log in with the right password
    Then a token carrying their id and email is issued
    And the returned user has no password hash
    """
    user = make_user()
    mock_uow.users.get_by_email.return_value = user
    identity_provider.verify_credentials.return_value = ExternalAccount(uid="ext", email=user.email)

    result = await LoginUseCase(mock_uow, identity_provider).execute(user.email, TEST_PASSWORD)

    assert result.is_ok()
    payload = verify_jwt(result.value.token)
    assert payload["user_id"] == str(user.id)
    assert payload["email"] == user.email
    assert result.value.user.has_company is False
    assert "password_hash" not in result.value.user.model_dump()


@pytest.mark.asyncio
async def test_login_reports_company(mock_uow, identity_provider):
    user = make_user()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.companies.get_by_owner_id.return_value = make_company(user.id)

    result = await LoginUseCase(mock_uow, identity_provider).execute(user.email, TEST_PASSWORD)

    assert result.value.user.has_company is True


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_are_indistinguishable(mock_uow, identity_provider):
    mock_uow.users.get_by_email.return_value = make_user()
    wrong_password = await LoginUseCase(mock_uow, identity_provider).execute(
        "jane@acme.com", "WrongPassword!"
    )

    mock_uow.users.get_by_email.return_value = None
    unknown_email = await LoginUseCase(mock_uow, identity_provider).execute(
        "nobody@acme.com", TEST_PASSWORD
    )

    assert wrong_password.is_err() and unknown_email.is_err()
    assert wrong_password.error == unknown_email.error
    assert wrong_password.error.code == "INVALID_CREDENTIALS"
    identity_provider.verify_credentials.assert_not_awaited()


@pytest.mark.asyncio
async def test_unverified_email_rejected(mock_uow, identity_provider):
    mock_uow.users.get_by_email.return_value = make_user(is_email_verified=False)

    result = await LoginUseCase(mock_uow, identity_provider).execute("jane@acme.com", TEST_PASSWORD)

    assert result.is_err()
    assert result.error.code == "EMAIL_NOT_VERIFIED"


@pytest.mark.asyncio
async def test_unverified_email_allowed_in_relaxed_mode(mock_uow, identity_provider):
    mock_uow.users.get_by_email.return_value = make_user(is_email_verified=False)

    result = await LoginUseCase(mock_uow, identity_provider, relaxed_mode=True).execute(
        "jane@acme.com", TEST_PASSWORD
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_provider_failure_rejects_login(mock_uow, identity_provider):
    mock_uow.users.get_by_email.return_value = make_user()
    identity_provider.verify_credentials.side_effect = IdentityProviderError(
        IdentityProviderError.UNAVAILABLE, "down"
    )

    result = await LoginUseCase(mock_uow, identity_provider).execute("jane@acme.com", TEST_PASSWORD)

    assert result.is_err()
    assert result.error.code == "AUTH_SERVICE_ERROR"


@pytest.mark.asyncio
async def test_provider_failure_ignored_in_relaxed_mode(mock_uow, identity_provider):
    mock_uow.users.get_by_email.return_value = make_user()
    identity_provider.verify_credentials.side_effect = IdentityProviderError(
        IdentityProviderError.UNAVAILABLE, "down"
    )

    result = await LoginUseCase(mock_uow, identity_provider, relaxed_mode=True).execute(
        "jane@acme.com", TEST_PASSWORD
    )

    assert result.is_ok()
