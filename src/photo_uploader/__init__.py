"""Photo upload service with S3 storage and EXIF enrichment."""
