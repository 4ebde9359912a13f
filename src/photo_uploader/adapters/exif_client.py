"""EXIF metadata service client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class ExifClient(Protocol):
    """Interface for the EXIF metadata service."""

    async def get_exif(self, photo_id: int) -> dict[str, object]:
        """Fetch raw EXIF metadata for a photo."""


@dataclass
class HttpxExifClient(ExifClient):
    """HTTPX-backed EXIF metadata client."""

    base_url: str
    timeout_seconds: float
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float) -> "HttpxExifClient":
        """Create an EXIF client with a managed httpx session."""
        return cls(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            http_client=httpx.AsyncClient(),
        )

    async def get_exif(self, photo_id: int) -> dict[str, object]:
        """Fetch EXIF metadata for a photo id."""
        url = f"{self.base_url.rstrip('/')}/exif/{photo_id}"
        response = await self.http_client.get(
            url,
            headers={"Accept": "application/json"},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
