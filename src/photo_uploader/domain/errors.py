"""Domain-level exceptions."""


class PhotoNotFoundError(Exception):
    """Raised when no photo exists for the requested identifier."""


class StorageError(Exception):
    """Raised when the object storage service rejects or fails a request."""


class UploadError(Exception):
    """Raised when a photo could not be transferred to object storage."""
