"""Best-effort EXIF enrichment for stored photos."""

import logging
from dataclasses import dataclass
from typing import Literal

import httpx

from photo_uploader.adapters.exif_client import ExifClient
from photo_uploader.domain.photos import ExifMetadata

_logger = logging.getLogger(__name__)

LookupOutcome = Literal["found", "not_found", "remote_error", "client_error"]


@dataclass(frozen=True)
class ExifLookup:
    """Result of an EXIF lookup; ``metadata`` is set only when found."""

    outcome: LookupOutcome
    metadata: ExifMetadata | None = None


@dataclass
class ExifService:
    """Service that fetches EXIF metadata without ever failing the caller."""

    client: ExifClient

    async def lookup(self, photo_id: int) -> ExifLookup:
        """Return EXIF metadata for a photo, or an empty lookup on any failure."""
        try:
            payload = await self.client.get_exif(photo_id)
            metadata = ExifMetadata.model_validate(payload)
        except Exception as exc:
            outcome = _classify_failure(exc)
            if outcome == "not_found":
                _logger.info("Metadata for photo %s not found", photo_id)
            elif outcome == "remote_error":
                _logger.warning("Metadata server error: %s", exc, exc_info=exc)
            else:
                _logger.error("Metadata fetch error: %s", exc, exc_info=exc)
            return ExifLookup(outcome=outcome)
        return ExifLookup(outcome="found", metadata=metadata)


def _classify_failure(exc: Exception) -> LookupOutcome:
    """Map a lookup failure to its logging severity class."""
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        if status_code == httpx.codes.NOT_FOUND:
            return "not_found"
        if httpx.codes.is_server_error(status_code):
            return "remote_error"
    return "client_error"
