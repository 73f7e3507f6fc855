"""Constants for the Bucket TTL Operator."""

# API Group
API_GROUP = "storage.cloud37.dev"
API_GROUP_VERSION = f"{API_GROUP}/v1alpha1"

# Resource Kinds
KIND_EXPIRING_BUCKET = "ExpiringBucket"

CONTROLLER_NAME = "bucket-ttl-operator"

# Lifecycle
LIFECYCLE_ACTION_DELETE = "Delete"
LIFECYCLE_RULE_ID_TEMPLATE = "expire-after-{days}-days"

# Condition Types
COND_READY = "Ready"
COND_LIFECYCLE_APPLY_FAILED = "LifecycleApplyFailed"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_VALIDATE_SUCCEEDED = "ValidateSucceeded"
EVENT_REASON_VALIDATE_FAILED = "ValidateFailed"
EVENT_REASON_LIFECYCLE_APPLIED = "LifecycleApplied"
