"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from photo_uploader.adapters.exif_client import HttpxExifClient
from photo_uploader.adapters.s3_storage import Boto3ObjectStorage
from photo_uploader.config import Settings
from photo_uploader.domain.photos import Photo
from photo_uploader.services.exif import ExifService
from photo_uploader.services.photos import PhotoService
from photo_uploader.services.repository import InMemoryRepository
from photo_uploader.services.uploads import UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    photo_service: PhotoService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage = Boto3ObjectStorage.create(resolved_settings)
    exif_client = HttpxExifClient.create(
        base_url=resolved_settings.exif_base_url,
        timeout_seconds=resolved_settings.exif_timeout_seconds,
    )
    upload_service = UploadService(
        storage=storage,
        bucket_name=resolved_settings.bucket_name,
        key_prefix=resolved_settings.key_prefix,
        temp_dir=resolved_settings.upload_temp_dir,
    )
    photo_service = PhotoService(
        upload_service=upload_service,
        exif_service=ExifService(exif_client),
        repository=InMemoryRepository[Photo](),
    )

    async def close_resources() -> None:
        await exif_client.close()
        await storage.close()

    return AppContainer(
        settings=resolved_settings,
        photo_service=photo_service,
        close_resources=close_resources,
    )
