"""
Image Store Port

Remote object store for company logos and banners.
"""

import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse


class ImageStoreError(Exception):
    REJECTED = "REJECTED"
    UNAVAILABLE = "UNAVAILABLE"

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


@dataclass
class StoredImage:
    url: str
    public_id: str


def extract_public_id(url: Optional[str]) -> Optional[str]:
    """
    Recover the store-side identifier from a public image URL.

    The identifier is the last path segment without its extension, e.g.
    https://res.cloudinary.com/demo/image/upload/v17/abc123.png -> abc123
    """
    if not url:
        return None
    path = urlparse(url).path
    segment = path.rstrip("/").rsplit("/", 1)[-1]
    public_id, _ = posixpath.splitext(segment)
    return public_id or None


class IImageStore(ABC):
    async def startup(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def upload(
        self, content: bytes, folder: str, filename: str, content_type: str
    ) -> StoredImage:
        pass

    @abstractmethod
    async def delete(self, public_id: str) -> None:
        pass
