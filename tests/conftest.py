"""Shared test fixtures."""

import io
import os
from dataclasses import dataclass, field
from typing import BinaryIO

import pytest

from photo_uploader.adapters.exif_client import ExifClient
from photo_uploader.adapters.s3_storage import ObjectStorage
from photo_uploader.config import Settings
from photo_uploader.containers import AppContainer
from photo_uploader.domain.photos import Photo, RequestBody
from photo_uploader.services.exif import ExifService
from photo_uploader.services.photos import PhotoService
from photo_uploader.services.repository import InMemoryRepository
from photo_uploader.services.uploads import UploadService

EXIF_PAYLOAD: dict[str, object] = {
    "dateTime": "2018-04-01T12:30:45+02:00",
    "exposureTime": 0.004,
    "fNumber": 2.8,
    "orientation": 1,
}


@dataclass
class InMemoryFilePart:
    """File part backed by in-memory bytes."""

    data: bytes
    content_type: str | None = "image/jpeg"
    content_length: int | None = None
    fail_after_reads: int | None = None
    reads: int = 0
    _buffer: BinaryIO = field(init=False)

    def __post_init__(self) -> None:
        self._buffer = io.BytesIO(self.data)

    @property
    def file(self) -> BinaryIO:
        return self._buffer

    async def read(self, size: int = -1) -> bytes:
        if self.fail_after_reads is not None and self.reads >= self.fail_after_reads:
            raise OSError("connection reset while reading part")
        self.reads += 1
        return self._buffer.read(size)


@dataclass
class StoredObject:
    """A PUT observed by the fake storage."""

    bucket: str
    key: str
    content_type: str | None
    content_length: int
    data: bytes
    temp_files: list[str]


@dataclass
class FakeObjectStorage(ObjectStorage):
    """Fake object storage that records PUTs and the spool directory state."""

    watch_dir: str | None = None
    error: Exception | None = None
    objects: list[StoredObject] = field(default_factory=list)

    async def put_object(
        self, *, bucket: str, key: str, content_type: str | None, body: RequestBody
    ) -> None:
        temp_files = sorted(os.listdir(self.watch_dir)) if self.watch_dir else []
        data = body.stream.read()
        self.objects.append(
            StoredObject(
                bucket=bucket,
                key=key,
                content_type=content_type,
                content_length=body.content_length,
                data=data,
                temp_files=temp_files,
            )
        )
        if self.error is not None:
            raise self.error


@dataclass
class FakeExifClient(ExifClient):
    """Fake EXIF client returning a fixed payload or raising."""

    payload: dict[str, object] = field(default_factory=lambda: dict(EXIF_PAYLOAD))
    error: Exception | None = None
    calls: list[int] = field(default_factory=list)

    async def get_exif(self, photo_id: int) -> dict[str, object]:
        self.calls.append(photo_id)
        if self.error is not None:
            raise self.error
        return self.payload


class CountingRepository(InMemoryRepository[Photo]):
    """In-memory repository that records lookups."""

    def __init__(self) -> None:
        super().__init__()
        self.lookups: list[int] = []

    def get(self, key: int) -> Photo | None:
        self.lookups.append(key)
        return super().get(key)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bucket_name="photos-bucket",
        key_prefix="uploads",
        exif_base_url="https://exif.test",
        aws_access_key_id="access-key",
        aws_secret_access_key="secret-key",
        aws_region="us-east-1",
    )


@pytest.fixture
def spool_dir(tmp_path) -> str:
    path = tmp_path / "spool"
    path.mkdir()
    return str(path)


@pytest.fixture
def storage(spool_dir: str) -> FakeObjectStorage:
    return FakeObjectStorage(watch_dir=spool_dir)


@pytest.fixture
def exif_client() -> FakeExifClient:
    return FakeExifClient()


@pytest.fixture
def repository() -> CountingRepository:
    return CountingRepository()


@pytest.fixture
def upload_service(
    settings: Settings, storage: FakeObjectStorage, spool_dir: str
) -> UploadService:
    return UploadService(
        storage=storage,
        bucket_name=settings.bucket_name,
        key_prefix=settings.key_prefix,
        temp_dir=spool_dir,
    )


@pytest.fixture
def photo_service(
    upload_service: UploadService,
    exif_client: FakeExifClient,
    repository: CountingRepository,
) -> PhotoService:
    return PhotoService(
        upload_service=upload_service,
        exif_service=ExifService(exif_client),
        repository=repository,
    )


@pytest.fixture
def container(settings: Settings, photo_service: PhotoService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        photo_service=photo_service,
        close_resources=close_resources,
    )
