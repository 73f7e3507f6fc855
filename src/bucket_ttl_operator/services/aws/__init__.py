"""S3-compatible storage backend."""
