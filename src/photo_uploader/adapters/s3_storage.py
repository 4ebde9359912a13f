"""S3 object storage client."""

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from photo_uploader.config import Settings
from photo_uploader.domain.errors import StorageError
from photo_uploader.domain.photos import RequestBody


class ObjectStorage(Protocol):
    """Interface for object storage writes."""

    async def put_object(
        self, *, bucket: str, key: str, content_type: str | None, body: RequestBody
    ) -> None:
        """Store the request body under ``key`` in ``bucket``."""


@dataclass
class Boto3ObjectStorage(ObjectStorage):
    """Object storage backed by a boto3 S3 client.

    boto3 is blocking, so each request runs in a worker thread.
    """

    client: Any

    @classmethod
    def create(cls, settings: Settings) -> "Boto3ObjectStorage":
        """Create a storage client from application settings."""
        config = Config(
            signature_version="s3v4",
            retries={"max_attempts": 3, "mode": "standard"},
            s3={
                "addressing_style": (
                    "path" if settings.s3_path_style_access_enabled else "auto"
                ),
                "use_dualstack_endpoint": settings.s3_dualstack_enabled,
                "use_accelerate_endpoint": settings.s3_accelerate_mode_enabled,
            },
        )
        client = boto3.client(
            "s3",
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            config=config,
        )
        return cls(client=client)

    async def put_object(
        self, *, bucket: str, key: str, content_type: str | None, body: RequestBody
    ) -> None:
        """Upload a request body with a PUT of known length."""
        params: dict[str, Any] = {
            "Bucket": bucket,
            "Key": key,
            "Body": body.stream,
            "ContentLength": body.content_length,
        }
        if content_type:
            params["ContentType"] = content_type
        try:
            await asyncio.to_thread(self.client.put_object, **params)
        except ClientError as exc:
            error = exc.response.get("Error", {})
            raise StorageError(
                f"S3 put_object failed ({error.get('Code', 'Unknown')}): "
                f"{error.get('Message', exc)}"
            ) from exc
        except BotoCoreError as exc:
            raise StorageError(f"S3 put_object failed: {exc}") from exc

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()
