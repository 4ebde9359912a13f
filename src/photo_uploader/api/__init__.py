"""HTTP API for the photo uploader."""
