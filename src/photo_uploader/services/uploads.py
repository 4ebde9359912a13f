"""Transfer of uploaded photo parts to object storage."""

import os
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from urllib.parse import quote

import aiofiles
import aiofiles.os

from photo_uploader.adapters.s3_storage import ObjectStorage
from photo_uploader.domain.errors import StorageError, UploadError
from photo_uploader.domain.photos import FilePart, RequestBody

SPOOL_PREFIX = "upload"
_CHUNK_SIZE = 64 * 1024


@dataclass
class UploadService:
    """Service that streams or spools file parts into object storage.

    Parts that declare their size are handed to storage as-is. Parts without
    a declared size are first copied to a temporary file, because a PUT must
    state its content length up front; the file is removed once the upload
    has finished, whatever its outcome.
    """

    storage: ObjectStorage
    bucket_name: str
    key_prefix: str
    temp_dir: str | None = None

    async def upload(self, file_name: str, part: FilePart) -> str:
        """Upload a part under the configured prefix and return its public URL."""
        key = object_key(self.key_prefix, file_name)
        try:
            async with self._request_body(file_name, part) as body:
                # A PUT cancelled mid-transfer may still finish in its worker
                # thread, leaving an object that no record points to.
                await self.storage.put_object(
                    bucket=self.bucket_name,
                    key=key,
                    content_type=part.content_type,
                    body=body,
                )
        except (OSError, StorageError) as exc:
            message = str(exc)
            raise (UploadError(message) if message else UploadError()) from exc
        return public_url(self.bucket_name, key)

    @asynccontextmanager
    async def _request_body(
        self, file_name: str, part: FilePart
    ) -> AsyncIterator[RequestBody]:
        if part.content_length is not None:
            yield RequestBody(stream=part.file, content_length=part.content_length)
            return
        async with spool_to_temp_file(
            part, suffix=file_name, directory=self.temp_dir
        ) as (path, size):
            with open(path, "rb") as stream:  # noqa: ASYNC230
                yield RequestBody(stream=stream, content_length=size)


@asynccontextmanager
async def spool_to_temp_file(
    part: FilePart, *, suffix: str, directory: str | None = None
) -> AsyncIterator[tuple[str, int]]:
    """Copy a part into a new temporary file and remove the file on exit.

    The file is only created when the context is entered. Yields the file
    path and the number of bytes written.
    """
    fd, path = tempfile.mkstemp(prefix=SPOOL_PREFIX, suffix=suffix, dir=directory)
    os.close(fd)
    try:
        size = 0
        async with aiofiles.open(path, "wb") as out:
            while chunk := await part.read(_CHUNK_SIZE):
                await out.write(chunk)
                size += len(chunk)
        yield path, size
    finally:
        await aiofiles.os.remove(path)


def object_key(key_prefix: str, file_name: str) -> str:
    """Join the configured key prefix and a file name into an object key."""
    prefix = key_prefix.strip("/")
    if not prefix:
        return file_name
    return f"{prefix}/{file_name}"


def public_url(bucket_name: str, key: str) -> str:
    """Return the canonical public URL of an object in an S3 bucket."""
    return f"http://{bucket_name}.s3.amazonaws.com/{quote(key)}"
