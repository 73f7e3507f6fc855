"""Base storage client interface."""

from __future__ import annotations

from typing import Protocol

from .models import BucketMetadata


class StorageClient(Protocol):
    """Protocol defining the storage operations used for lifecycle management."""

    def get(self, bucket: str) -> BucketMetadata:
        """Fetch bucket metadata including its lifecycle rules.

        Raises:
            NotFoundError: If the bucket does not exist
            ForbiddenError: If access is denied
            StorageError: On any other failure
        """
        ...

    def update(self, bucket: str, metadata: BucketMetadata) -> BucketMetadata:
        """Replace the bucket's lifecycle configuration with ``metadata``'s rules.

        Raises:
            ConflictError: If the bucket was modified concurrently
            NotFoundError: If the bucket does not exist
            ForbiddenError: If access is denied
            StorageError: On any other failure
        """
        ...
