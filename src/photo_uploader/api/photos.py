"""Photo upload and retrieval endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

from fastapi import APIRouter, File, Form, Path, Request, UploadFile

from photo_uploader.domain.photos import MAX_PHOTO_ID, FilePart, Photo, PhotoParams

if TYPE_CHECKING:
    from photo_uploader.containers import AppContainer

router = APIRouter(prefix="/photo", tags=["photos"])


@dataclass
class UploadFilePart(FilePart):
    """File part view over a FastAPI upload."""

    upload: UploadFile

    @property
    def content_type(self) -> str | None:
        return self.upload.content_type

    @property
    def content_length(self) -> int | None:
        raw = self.upload.headers.get("content-length")
        if raw is None or not raw.strip().isdigit():
            return None
        return int(raw)

    @property
    def file(self) -> BinaryIO:
        return self.upload.file

    async def read(self, size: int = -1) -> bytes:
        return await self.upload.read(size)


@router.post("")
@router.post("/", include_in_schema=False)
async def create_photo(
    request: Request,
    metadata: str = Form(alias="json"),
    photo: UploadFile = File(),
) -> dict[str, object]:
    """Upload a photo to storage and record it."""
    container: AppContainer = request.app.state.container
    params = PhotoParams.model_validate_json(metadata)
    created = await container.photo_service.create(params, UploadFilePart(photo))
    return photo_payload(created)


@router.get("/{photo_id}")
@router.get("/{photo_id}/", include_in_schema=False)
async def get_photo(
    request: Request, photo_id: int = Path(ge=1, le=MAX_PHOTO_ID)
) -> dict[str, object]:
    """Return a photo, with EXIF metadata when the metadata service has it."""
    container: AppContainer = request.app.state.container
    found = await container.photo_service.get(photo_id)
    return photo_payload(found)


def photo_payload(photo: Photo) -> dict[str, object]:
    """Serialize a photo for JSON responses, omitting absent EXIF data."""
    payload: dict[str, object] = {
        "id": photo.id,
        "user": photo.user,
        "description": photo.description,
        "url": photo.url,
    }
    if photo.exif is not None:
        payload["exif"] = photo.exif.model_dump(mode="json", by_alias=True)
    return payload
