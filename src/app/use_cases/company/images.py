"""
Image helpers shared by the company profile use cases.
"""

import logging
from typing import Optional

from src.app.services.best_effort import run_best_effort
from src.app.services.image_store import (
    IImageStore,
    ImageStoreError,
    StoredImage,
    extract_public_id,
)
from src.domain.entities import ImageKind
from src.libs.result import Error, Result, Return
from .dtos import ImageUpload

logger = logging.getLogger(__name__)


async def upload_image(
    image_store: IImageStore, kind: ImageKind, image: ImageUpload
) -> Result[StoredImage]:
    """Upload into the kind's folder; failures abort the calling operation."""
    try:
        stored = await image_store.upload(
            image.content, kind.folder, image.filename, image.content_type
        )
    except ImageStoreError as exc:
        logger.error(f"{kind.value} upload failed: {exc}")
        if exc.code == ImageStoreError.REJECTED:
            return Return.err(Error("INVALID_IMAGE", f"Invalid {kind.value} image: {exc.message}"))
        return Return.err(Error("IMAGE_UPLOAD_FAILED", f"Failed to upload {kind.value}"))
    return Return.ok(stored)


async def discard_image(image_store: IImageStore, url: Optional[str]) -> None:
    """Delete a previously stored image; failures are logged and ignored."""
    public_id = extract_public_id(url)
    if public_id is None:
        return
    await run_best_effort(f"delete image {public_id}", image_store.delete(public_id))
