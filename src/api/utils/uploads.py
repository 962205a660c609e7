"""
Multipart upload handling for company images.
"""

import json
from typing import Any, Dict, Optional

from fastapi import UploadFile

from src.api.error import ClientError
from src.app.use_cases.company import ImageUpload
from src.libs.result import Error

# gif passes this filter but is refused by the image store's format list
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif")


def _invalid_file(message: str) -> ClientError:
    return ClientError(Error("INVALID_FILE", message))


async def read_image(file: Optional[UploadFile], max_bytes: int) -> Optional[ImageUpload]:
    """
    Read an uploaded image into memory after validating type and size.

    Returns None when the field was not sent.
    """
    if file is None or not file.filename:
        return None

    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise _invalid_file("Only image files are allowed (jpeg, jpg, png, webp, gif)")

    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise _invalid_file(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB")
    if not content:
        raise _invalid_file("Uploaded file is empty")

    return ImageUpload(content=content, filename=file.filename, content_type=file.content_type)


async def require_image(file: Optional[UploadFile], max_bytes: int) -> ImageUpload:
    image = await read_image(file, max_bytes)
    if image is None:
        raise _invalid_file("No file uploaded")
    return image


def parse_social_links(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """social_links arrives as a JSON-encoded object inside the form."""
    if raw is None or raw == "":
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        raise ClientError(Error("VALIDATION_ERROR", "social_links must be a JSON object"))
    if not isinstance(value, dict):
        raise ClientError(Error("VALIDATION_ERROR", "social_links must be a JSON object"))
    return value
