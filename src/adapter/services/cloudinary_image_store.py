"""
Cloudinary image store.

Uploads go through the Cloudinary SDK (blocking calls, run in the
threadpool). Images are placed in an asset folder while keeping a
folder-less public id, so the id can be recovered from the delivery
URL's last segment.
"""

import io
import logging

import cloudinary
import cloudinary.uploader
from cloudinary import exceptions as cloudinary_errors
from starlette.concurrency import run_in_threadpool

from src.app.services.image_store import IImageStore, ImageStoreError, StoredImage

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = ["jpg", "jpeg", "png", "webp"]
UPLOAD_TRANSFORMATION = [
    {"width": 800, "height": 600, "crop": "limit"},
    {"quality": "auto:good"},
]

# Cloudinary answered and refused the request; anything else is an outage
_REJECTED_ERRORS = (
    cloudinary_errors.BadRequest,
    cloudinary_errors.AuthorizationRequired,
    cloudinary_errors.NotAllowed,
    cloudinary_errors.NotFound,
    cloudinary_errors.AlreadyExists,
)


class CloudinaryImageStore(IImageStore):
    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: float = 300.0):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    async def startup(self) -> None:
        cloudinary.config(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
        )
        logger.info(f"Cloudinary configured for cloud {self.cloud_name}")

    async def upload(
        self, content: bytes, folder: str, filename: str, content_type: str
    ) -> StoredImage:
        try:
            data = await run_in_threadpool(
                cloudinary.uploader.upload,
                io.BytesIO(content),
                filename=filename,
                resource_type="image",
                asset_folder=folder,
                use_asset_folder_as_public_id_prefix=False,
                allowed_formats=ALLOWED_FORMATS,
                transformation=UPLOAD_TRANSFORMATION,
                timeout=self.timeout,
            )
        except cloudinary_errors.Error as exc:
            raise self._classify("upload", exc)

        logger.info(f"Image uploaded to Cloudinary: {data['public_id']}")
        return StoredImage(url=data["secure_url"], public_id=data["public_id"])

    async def delete(self, public_id: str) -> None:
        try:
            data = await run_in_threadpool(
                cloudinary.uploader.destroy,
                public_id,
                resource_type="image",
                invalidate=True,
                timeout=self.timeout,
            )
        except cloudinary_errors.Error as exc:
            raise self._classify("destroy", exc)

        if data.get("result") != "ok":
            raise ImageStoreError(
                ImageStoreError.REJECTED, f"Delete of {public_id} returned {data.get('result')}"
            )
        logger.info(f"Image deleted from Cloudinary: {public_id}")

    @staticmethod
    def _classify(operation: str, exc: cloudinary_errors.Error) -> ImageStoreError:
        logger.error(f"Cloudinary {operation} failed: {exc}")
        if isinstance(exc, _REJECTED_ERRORS):
            return ImageStoreError(ImageStoreError.REJECTED, str(exc))
        return ImageStoreError(ImageStoreError.UNAVAILABLE, str(exc))
