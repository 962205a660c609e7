import pytest

from src.adapter.services.fake_identity_provider import FakeIdentityProvider
from src.app.services.identity_provider import IdentityProviderError


@pytest.mark.asyncio
async def test_otp_must_match_configured_code():
    provider = FakeIdentityProvider(otp_code="654321")
    verification_id = await provider.send_sms_otp("+919876543210")

    await provider.verify_sms_otp(verification_id, "654321")
    with pytest.raises(IdentityProviderError) as exc_info:
        await provider.verify_sms_otp(verification_id, "123456")

    assert exc_info.value.code == IdentityProviderError.INVALID_OTP


@pytest.mark.asyncio
async def test_weak_password_rejected():
    with pytest.raises(IdentityProviderError) as exc_info:
        await FakeIdentityProvider().create_account("jane@acme.com", "123", "+919876543210")

    assert exc_info.value.code == IdentityProviderError.WEAK_PASSWORD


@pytest.mark.asyncio
async def test_reset_link_points_at_client():
    provider = FakeIdentityProvider(client_url="http://client.test/")

    link = await provider.generate_password_reset_link("jane@acme.com")

    assert link.startswith("http://client.test/reset-password?")
    assert "oobCode=" in link
