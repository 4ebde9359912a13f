"""Domain models for photos and their metadata."""

from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_DESCRIPTION_LENGTH = 1024
MAX_PHOTO_ID = 2**63 - 1
MAX_USER_ID = 2**63 - 1


class ExifMetadata(BaseModel):
    """EXIF metadata returned by the metadata service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date_time: datetime = Field(alias="dateTime")
    exposure_time: float = Field(alias="exposureTime")
    f_number: float = Field(alias="fNumber")
    orientation: int


class PhotoParams(BaseModel):
    """User-supplied fields sent alongside an uploaded photo."""

    user: int
    description: str

    @field_validator("user")
    @classmethod
    def validate_user(cls, value: int) -> int:
        if value < 1:
            raise ValueError("user ID should be greater or equal to 1")
        if value > MAX_USER_ID:
            raise ValueError(f"user ID should be less or equal to {MAX_USER_ID}")
        return value

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        if len(value) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"description should be no longer than {MAX_DESCRIPTION_LENGTH} "
                "characters"
            )
        return value


@dataclass(frozen=True)
class Photo:
    """A stored photo record."""

    id: int
    user: int
    description: str
    url: str
    exif: ExifMetadata | None = None


class FilePart(Protocol):
    """An inbound multipart file part."""

    @property
    def content_type(self) -> str | None:
        """Declared media type of the part, if any."""

    @property
    def content_length(self) -> int | None:
        """Declared size of the part in bytes, if any."""

    @property
    def file(self) -> BinaryIO:
        """Synchronous handle positioned at the start of the part body."""

    async def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes from the part body."""


@dataclass(frozen=True)
class RequestBody:
    """A storage request body and the number of bytes it will yield."""

    stream: BinaryIO
    content_length: int
