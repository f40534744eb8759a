from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass

from catalog.core.config import settings
from catalog.core.errors import BadRequest, PayloadTooLarge
from catalog.core.logging import get_logger
from catalog.services.storage import FileData, FileStorage

logger = get_logger(__name__)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/jpg", "image/webp")


@dataclass(frozen=True)
class UploadedImage:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class ImageOutcome(str, enum.Enum):
    no_image = "no_image"
    replaced = "replaced"
    upload_failed = "upload_failed"


@dataclass(frozen=True)
class ImageSwap:
    """Result of one pass through the replacement protocol."""
    uri: str | None
    outcome: ImageOutcome


def check_image(image: UploadedImage) -> None:
    if image.size > settings.MAX_UPLOAD_SIZE:
        raise PayloadTooLarge("File size limit has been reached")
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise BadRequest("Invalid image type. Only jpeg, png, jpg, webp allowed")


def generate_image_name(content_type: str, suffix: str) -> str:
    """Opaque, server-side name; never derived from the client filename."""
    ext = content_type.split("/")[-1]
    return f"{uuid.uuid4()}-{suffix}.{ext}"


async def upload_image(storage: FileStorage, image: UploadedImage, *, suffix: str) -> str:
    """
    Upload a new image and return its public URI.

    Used on create: any upload error propagates and fails the request.
    """
    name = generate_image_name(image.content_type, suffix)
    await storage.upload(FileData(name=name, data=image.data, content_type=image.content_type))
    return storage.get_object_uri(name)


async def discard_image(storage: FileStorage, uri: str | None) -> None:
    """Best-effort delete. An orphaned object is acceptable, a failed request is not."""
    if not uri:
        return
    try:
        await storage.delete(uri)
        logger.info(f"Image deleted from storage: {uri}")
    except Exception as e:
        logger.error(f"Failed to delete image {uri}: {e}")


async def replace_image(
    storage: FileStorage,
    image: UploadedImage | None,
    current_uri: str | None,
    *,
    suffix: str,
) -> ImageSwap:
    """
    Upload-then-delete replacement used on update.

      - no new file      -> keep the current reference
      - upload succeeds  -> point at the new object, then delete the old one
      - upload fails     -> keep the current reference; the update continues
    """
    if image is None:
        return ImageSwap(uri=current_uri, outcome=ImageOutcome.no_image)

    try:
        new_uri = await upload_image(storage, image, suffix=suffix)
    except Exception as e:
        logger.error(f"Image upload failed, keeping previous image: {e}")
        return ImageSwap(uri=current_uri, outcome=ImageOutcome.upload_failed)

    await discard_image(storage, current_uri)
    return ImageSwap(uri=new_uri, outcome=ImageOutcome.replaced)
