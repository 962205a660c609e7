from typing import List, Tuple
from urllib.parse import parse_qs, urlparse

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.fake_identity_provider import FakeIdentityProvider
from src.adapter.services.memory_image_store import InMemoryImageStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.depends import get_email_sender, get_identity_provider, get_image_store, get_unit_of_work
from src.domain import entities  # noqa: F401
from tests.fixtures.json_loader import PayloadLoader

OTP_CODE = "123456"


class IntegrationConfig(ApplicationConfig):
    APP_ENV = "test"
    API_PREFIX = "/api"
    CLIENT_URL = "http://client.test"
    RELAXED_MODE = False
    RATE_LIMIT_ENABLED = False
    ENABLE_LOGGING_MIDDLEWARE = False
    MAX_UPLOAD_BYTES = 1024 * 1024


class RelaxedConfig(IntegrationConfig):
    RELAXED_MODE = True


class RateLimitedConfig(IntegrationConfig):
    RATE_LIMIT_ENABLED = True
    RATE_LIMIT_MAX_REQUESTS = 10
    LOGIN_RATE_LIMIT_MAX_ATTEMPTS = 2


class RecordingEmailSender(IEmailSender):
    def __init__(self):
        self.sent: List[Tuple[str, str, str]] = []

    async def send_verification_email(self, to_email: str, verification_link: str) -> None:
        self.sent.append(("verification", to_email, verification_link))

    async def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        self.sent.append(("password_reset", to_email, reset_link))

    def verification_token_for(self, email: str) -> str:
        link = next(l for kind, to, l in reversed(self.sent) if kind == "verification" and to == email)
        return parse_qs(urlparse(link).query)["token"][0]


@pytest.fixture
def otp_code():
    return OTP_CODE


@pytest.fixture
def payloads():
    return PayloadLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider(otp_code=OTP_CODE, client_url=IntegrationConfig.CLIENT_URL)


@pytest.fixture
def image_store():
    return InMemoryImageStore(base_url="https://images.test")


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def app_config(request):
    """Tests opt into other settings with the relaxed or rate_limited marker"""
    if request.node.get_closest_marker("relaxed"):
        return RelaxedConfig
    if request.node.get_closest_marker("rate_limited"):
        return RateLimitedConfig
    return IntegrationConfig


@pytest_asyncio.fixture
async def client(app_config, db_session, identity_provider, image_store, email_sender):
    from src.api.app import create_app

    app = create_app(app_config)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_image_store] = lambda: image_store
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def register_user(client, payloads):
    async def register(key: str = "register", **overrides) -> dict:
        response = await client.post("/api/auth/register", json=payloads.get(key, **overrides))
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return register


@pytest_asyncio.fixture
async def login_verified(client, payloads, email_sender, register_user):
    """Register, verify email and mobile, log in; returns the auth header"""

    async def login(key: str = "register") -> dict:
        payload = payloads.get(key)
        data = await register_user(key)

        token = email_sender.verification_token_for(payload["email"])
        response = await client.get("/api/auth/verify-email", params={"token": token})
        assert response.status_code == 200, response.text

        response = await client.post(
            "/api/auth/verify-mobile", json={"user_id": data["user_id"], "otp": OTP_CODE}
        )
        assert response.status_code == 200, response.text

        response = await client.post(
            "/api/auth/login", json={"email": payload["email"], "password": payload["password"]}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['data']['token']}"}

    return login
