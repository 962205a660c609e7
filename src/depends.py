from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.cloudinary_image_store import CloudinaryImageStore
from src.adapter.services.email_sender import ConsoleEmailSender, SmtpEmailSender
from src.adapter.services.fake_identity_provider import FakeIdentityProvider
from src.adapter.services.firebase_identity_provider import FirebaseIdentityProvider
from src.adapter.services.memory_image_store import InMemoryImageStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.image_store import IImageStore
from src.domain import entities  # noqa: F401  registers tables on SQLModel.metadata

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_config(request: Request):
    return request.app.state.config


def get_identity_provider(request: Request) -> IIdentityProvider:
    return request.app.state.identity_provider


def get_image_store(request: Request) -> IImageStore:
    return request.app.state.image_store


def get_email_sender(request: Request) -> IEmailSender:
    return request.app.state.email_sender


def build_identity_provider(config) -> IIdentityProvider:
    if config.IDENTITY_PROVIDER == "firebase":
        return FirebaseIdentityProvider(
            config.FIREBASE_CREDENTIALS_FILE,
            config.FIREBASE_API_KEY,
            timeout=config.REQUEST_TIMEOUT_SECONDS,
        )
    return FakeIdentityProvider(otp_code=config.DEV_OTP_CODE, client_url=config.CLIENT_URL)


def build_image_store(config) -> IImageStore:
    if config.IMAGE_STORE == "cloudinary":
        return CloudinaryImageStore(
            config.CLOUDINARY_CLOUD_NAME,
            config.CLOUDINARY_API_KEY,
            config.CLOUDINARY_API_SECRET,
            timeout=config.REQUEST_TIMEOUT_SECONDS,
        )
    return InMemoryImageStore()


def build_email_sender(config) -> IEmailSender:
    if config.EMAIL_BACKEND == "smtp":
        return SmtpEmailSender(
            config.SMTP_HOST,
            config.SMTP_PORT,
            config.SMTP_USERNAME,
            config.SMTP_PASSWORD,
            config.EMAIL_FROM,
        )
    return ConsoleEmailSender()
