"""Photo creation and retrieval."""

import logging
import uuid
from dataclasses import dataclass, replace

from photo_uploader.domain.errors import PhotoNotFoundError
from photo_uploader.domain.photos import FilePart, Photo, PhotoParams
from photo_uploader.services.exif import ExifService
from photo_uploader.services.repository import Repository
from photo_uploader.services.uploads import UploadService

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/png": ".png",
}

_logger = logging.getLogger(__name__)


@dataclass
class PhotoService:
    """Application service composing uploads, storage and enrichment."""

    upload_service: UploadService
    exif_service: ExifService
    repository: Repository[Photo]

    async def create(self, params: PhotoParams, part: FilePart) -> Photo:
        """Upload a photo and record it once the upload has succeeded."""
        file_name = photo_file_name(part.content_type)
        url = await self.upload_service.upload(file_name, part)
        photo = self.repository.add(
            lambda photo_id: Photo(
                id=photo_id,
                user=params.user,
                description=params.description,
                url=url,
            )
        )
        _logger.info("Stored photo %s for user %s at %s", photo.id, photo.user, url)
        return photo

    async def get(self, photo_id: int) -> Photo:
        """Return a photo with EXIF metadata attached when available."""
        photo = self.repository.get(photo_id)
        if photo is None:
            raise PhotoNotFoundError("photo not found")
        lookup = await self.exif_service.lookup(photo_id)
        if lookup.metadata is None:
            return photo
        return replace(photo, exif=lookup.metadata)


def photo_file_name(content_type: str | None) -> str:
    """Generate a unique object file name for an uploaded photo."""
    media_type = (content_type or "").split(";", maxsplit=1)[0].strip().lower()
    return f"{uuid.uuid4()}{_EXTENSIONS.get(media_type, '')}"
