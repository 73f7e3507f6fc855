"""Storage client capability and lifecycle models."""

from .base import StorageClient
from .errors import ConflictError, ForbiddenError, NotFoundError, StorageError, translate_client_error
from .models import (
    BucketMetadata,
    LifecycleAction,
    LifecycleCondition,
    LifecycleRule,
    bucket_name_from_ref,
)

__all__ = [
    "StorageClient",
    "StorageError",
    "NotFoundError",
    "ConflictError",
    "ForbiddenError",
    "translate_client_error",
    "BucketMetadata",
    "LifecycleAction",
    "LifecycleCondition",
    "LifecycleRule",
    "bucket_name_from_ref",
]
