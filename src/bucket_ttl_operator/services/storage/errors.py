"""Error taxonomy for storage client operations."""

from __future__ import annotations

from botocore.exceptions import BotoCoreError, ClientError

NOT_FOUND_CODES = {"NoSuchBucket", "NotFound", "404"}
FORBIDDEN_CODES = {"AccessDenied", "Forbidden", "AllAccessDisabled", "403"}
CONFLICT_CODES = {
    "OperationAborted",
    "ConflictingOperationInProgress",
    "PreconditionFailed",
    "409",
    "412",
}


class StorageError(Exception):
    """Generic or transport failure talking to the storage service."""

    def __init__(self, message: str, bucket: str | None = None, operation: str | None = None) -> None:
        super().__init__(message)
        self.bucket = bucket
        self.operation = operation


class NotFoundError(StorageError):
    """The target bucket does not exist."""


class ConflictError(StorageError):
    """The bucket was modified concurrently."""


class ForbiddenError(StorageError):
    """The caller lacks permission for the operation."""


def translate_client_error(
    error: ClientError | BotoCoreError,
    bucket: str,
    operation: str,
) -> StorageError:
    """Map a botocore error onto the storage error taxonomy.

    Args:
        error: Error raised by botocore
        bucket: Bucket the operation targeted
        operation: Name of the storage client operation

    Returns:
        Translated error, chained by the caller with ``raise ... from error``
    """
    message = f"{operation} failed for bucket {bucket}: {error}"
    if not isinstance(error, ClientError):
        return StorageError(message, bucket=bucket, operation=operation)

    code = str(error.response.get("Error", {}).get("Code", ""))
    status = str(error.response.get("ResponseMetadata", {}).get("HTTPStatusCode", ""))

    if code in NOT_FOUND_CODES or status == "404":
        return NotFoundError(message, bucket=bucket, operation=operation)
    if code in FORBIDDEN_CODES or status == "403":
        return ForbiddenError(message, bucket=bucket, operation=operation)
    if code in CONFLICT_CODES or status in ("409", "412"):
        return ConflictError(message, bucket=bucket, operation=operation)
    return StorageError(message, bucket=bucket, operation=operation)
