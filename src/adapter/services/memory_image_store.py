"""In-process image store for development and tests."""

import logging
import mimetypes
from typing import Dict
from uuid import uuid4

from src.app.services.image_store import IImageStore, ImageStoreError, StoredImage

logger = logging.getLogger(__name__)

# Same formats the Cloudinary upload accepts
ACCEPTED_CONTENT_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")


class InMemoryImageStore(IImageStore):
    def __init__(self, base_url: str = "http://localhost/images"):
        self.base_url = base_url.rstrip("/")
        self.images: Dict[str, bytes] = {}

    async def upload(
        self, content: bytes, folder: str, filename: str, content_type: str
    ) -> StoredImage:
        if content_type not in ACCEPTED_CONTENT_TYPES:
            raise ImageStoreError(
                ImageStoreError.REJECTED, f"Image format {content_type} is not allowed"
            )
        public_id = uuid4().hex
        extension = mimetypes.guess_extension(content_type) or ".jpg"
        self.images[public_id] = content
        url = f"{self.base_url}/{folder}/v1/{public_id}{extension}"
        logger.info(f"Image stored in memory: {public_id}")
        return StoredImage(url=url, public_id=public_id)

    async def delete(self, public_id: str) -> None:
        if self.images.pop(public_id, None) is None:
            raise ImageStoreError(ImageStoreError.REJECTED, f"Image {public_id} not found")
