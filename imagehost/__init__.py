"""Image upload service with local disk and S3 storage backends."""
