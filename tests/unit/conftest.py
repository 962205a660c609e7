import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.email_exists = AsyncMock(return_value=False)
    uow.users.mobile_exists = AsyncMock(return_value=False)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.get_by_verification_token = AsyncMock(return_value=None)

    uow.companies = MagicMock()
    uow.companies.get_by_owner_id = AsyncMock(return_value=None)
    uow.companies.get_by_id = AsyncMock(return_value=None)
    uow.companies.name_exists = AsyncMock(return_value=False)
    uow.companies.create = AsyncMock(side_effect=lambda company: company)
    uow.companies.update_scoped = AsyncMock(return_value=None)
    uow.companies.delete_scoped = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def identity_provider():
    provider = MagicMock()
    provider.create_account = AsyncMock()
    provider.verify_credentials = AsyncMock()
    provider.send_sms_otp = AsyncMock(return_value="verification-id")
    provider.verify_sms_otp = AsyncMock(return_value=None)
    provider.generate_password_reset_link = AsyncMock(
        return_value="http://client.test/reset-password?oobCode=abc"
    )
    provider.update_password = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_verification_email = AsyncMock(return_value=None)
    sender.send_password_reset_email = AsyncMock(return_value=None)
    return sender


@pytest.fixture
def image_store():
    store = MagicMock()
    store.upload = AsyncMock()
    store.delete = AsyncMock(return_value=None)
    return store
