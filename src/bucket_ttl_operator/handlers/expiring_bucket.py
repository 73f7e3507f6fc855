"""Handler for ExpiringBucket CRD."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any

import kopf

from .. import metrics
from ..builders.expiration import create_expiration_config_from_spec
from ..builders.provider import create_storage_client_from_env
from ..constants import API_GROUP_VERSION, KIND_EXPIRING_BUCKET
from ..reconciler import LifecycleReconciler
from ..services.storage.errors import ConflictError, ForbiddenError, NotFoundError, StorageError
from ..utils.conditions import (
    clear_lifecycle_apply_failed_condition,
    set_lifecycle_apply_failed_condition,
    set_ready_condition,
)
from ..utils.errors import sanitize_exception
from ..utils.events import emit_lifecycle_applied, emit_validate_succeeded
from .base import BaseHandler

CONFLICT_RETRY_DELAY_SECONDS = 5
STORAGE_RETRY_DELAY_SECONDS = 30

# Retries for failed applies are owned by kopf, never by the reconciler
HANDLER_RETRIES = int(os.getenv("HANDLER_MAX_RETRIES", "5"))
HANDLER_BACKOFF_SECONDS = float(os.getenv("HANDLER_BACKOFF_SECONDS", "10"))
DRIFT_CHECK_INTERVAL_SECONDS = int(os.getenv("DRIFT_CHECK_INTERVAL_SECONDS", "300"))


class ExpiringBucketHandler(BaseHandler):
    """Handler for ExpiringBucket resources."""

    def __init__(self, client_factory: Any = create_storage_client_from_env):
        """Initialize expiring bucket handler.

        Args:
            client_factory: Callable returning a storage client
        """
        super().__init__(KIND_EXPIRING_BUCKET)
        self.client_factory = client_factory

    def reconcile(
        self,
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile ExpiringBucket resource."""
        generation = meta.get("generation", 0)
        conditions = list(status.get("conditions", []))

        try:
            config = create_expiration_config_from_spec(spec)
        except ValueError as e:
            conditions = set_lifecycle_apply_failed_condition(
                conditions, str(e), reason="InvalidSpec", observed_generation=generation
            )
            conditions = set_ready_condition(conditions, False, str(e), observed_generation=generation)
            self.update_resource_status(patch, meta, False, {"conditions": conditions})
            self.handle_validation_error(meta, str(e))
            return

        emit_validate_succeeded(meta)
        bucket_name = config.bucket_name

        reconciler = LifecycleReconciler(self.client_factory())
        try:
            result = reconciler.apply(bucket_name, config.ttl)
        except StorageError as e:
            self._handle_storage_error(meta, patch, conditions, bucket_name, e)
            return

        if result.changed:
            self.log_info(
                meta,
                f"Drift detected: lifecycle configuration for bucket {bucket_name}",
                reason="DriftDetected",
                bucket_name=bucket_name,
                resource_type="lifecycle",
                previous_rules=len(result.previous_rules),
                ttl=config.ttl,
            )
            metrics.drift_detected_total.labels(kind=self.kind, resource_type="lifecycle").inc()
            metrics.lifecycle_operations_total.labels(operation="replace", result="success").inc()
            emit_lifecycle_applied(meta, bucket_name, config.ttl)
        else:
            metrics.lifecycle_operations_total.labels(operation="noop", result="success").inc()

        conditions = clear_lifecycle_apply_failed_condition(conditions, observed_generation=generation)
        conditions = set_ready_condition(
            conditions,
            True,
            f"Bucket {bucket_name} expires objects after {config.ttl} days",
            observed_generation=generation,
        )
        self.update_resource_status(
            patch,
            meta,
            True,
            {
                "bucketName": bucket_name,
                "ttl": config.ttl,
                "lastSyncTime": datetime.now(timezone.utc).isoformat(),
                "conditions": conditions,
            },
        )

    def _handle_storage_error(
        self,
        meta: dict[str, Any],
        patch: kopf.Patch,
        conditions: list[dict[str, Any]],
        bucket_name: str,
        error: StorageError,
    ) -> None:
        """Record a failed apply and hand retry decisions to kopf.

        Raises:
            kopf.PermanentError: For missing buckets and denied access
            kopf.TemporaryError: For conflicts and other storage failures
        """
        generation = meta.get("generation", 0)
        message = f"Failed to apply lifecycle to bucket {bucket_name}: {sanitize_exception(error)}"
        reason = type(error).__name__.removesuffix("Error")

        metrics.lifecycle_operations_total.labels(operation="replace", result="failed").inc()
        conditions = set_lifecycle_apply_failed_condition(
            conditions, message, reason=reason, observed_generation=generation
        )
        conditions = set_ready_condition(conditions, False, message, observed_generation=generation)
        self.update_resource_status(patch, meta, False, {"bucketName": bucket_name, "conditions": conditions})

        if isinstance(error, (NotFoundError, ForbiddenError)):
            raise kopf.PermanentError(message) from error
        if isinstance(error, ConflictError):
            raise kopf.TemporaryError(message, delay=CONFLICT_RETRY_DELAY_SECONDS) from error
        raise kopf.TemporaryError(message, delay=STORAGE_RETRY_DELAY_SECONDS) from error


# Global handler instance
_handler = ExpiringBucketHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_EXPIRING_BUCKET, retries=HANDLER_RETRIES, backoff=HANDLER_BACKOFF_SECONDS)
@kopf.on.update(API_GROUP_VERSION, KIND_EXPIRING_BUCKET, retries=HANDLER_RETRIES, backoff=HANDLER_BACKOFF_SECONDS)
@kopf.on.resume(API_GROUP_VERSION, KIND_EXPIRING_BUCKET, retries=HANDLER_RETRIES, backoff=HANDLER_BACKOFF_SECONDS)
@kopf.timer(API_GROUP_VERSION, KIND_EXPIRING_BUCKET, interval=DRIFT_CHECK_INTERVAL_SECONDS)
def handle_expiring_bucket(
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle ExpiringBucket resource reconciliation."""
    _handler.reconcile_with_metrics(meta, lambda: _handler.reconcile(spec, meta, status, patch))
