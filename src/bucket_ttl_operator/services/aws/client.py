"""AWS S3 storage client implementation."""

from __future__ import annotations

import logging
import time
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ... import metrics
from ...constants import LIFECYCLE_ACTION_DELETE, LIFECYCLE_RULE_ID_TEMPLATE
from ..storage.errors import translate_client_error
from ..storage.models import BucketMetadata, LifecycleAction, LifecycleCondition, LifecycleRule

logger = logging.getLogger(__name__)

ACTION_SET_STORAGE_CLASS = "SetStorageClass"
ACTION_ABORT_MULTIPART = "AbortIncompleteMultipartUpload"
ACTION_UNKNOWN = "Unknown"


class AWSStorageClient:
    """S3-compatible storage client for bucket lifecycle configuration."""

    def __init__(
        self,
        endpoint: str | None,
        region: str,
        access_key: str | None = None,
        secret_key: str | None = None,
        session_token: str | None = None,
        path_style: bool = True,
        insecure_skip_verify: bool = False,
    ) -> None:
        """Initialize the S3 storage client.

        Args:
            endpoint: S3 endpoint URL, or None for the AWS default
            region: Region name
            access_key: Access key ID; the boto3 credential chain is used when omitted
            secret_key: Secret access key
            session_token: Optional session token for temporary credentials
            path_style: Use path-style addressing
            insecure_skip_verify: Skip TLS verification
        """
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": "path" if path_style else "auto"},
        )

        self.client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            aws_session_token=session_token,
            config=config,
            verify=not insecure_skip_verify,
        )

    def get(self, bucket: str) -> BucketMetadata:
        """Fetch the bucket's lifecycle rules."""
        start_time = time.time()
        try:
            response = self.client.get_bucket_lifecycle_configuration(Bucket=bucket)
            rules = tuple(rule_from_s3(rule) for rule in response.get("Rules", []))
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "NoSuchLifecycleConfiguration":
                self._record_call("get_lifecycle", "success", start_time)
                return BucketMetadata(name=bucket)
            self._record_call("get_lifecycle", "failed", start_time)
            logger.error(f"Failed to get lifecycle for bucket {bucket}: {e}")
            raise translate_client_error(e, bucket, "get") from e
        except BotoCoreError as e:
            self._record_call("get_lifecycle", "failed", start_time)
            logger.error(f"Failed to get lifecycle for bucket {bucket}: {e}")
            raise translate_client_error(e, bucket, "get") from e

        self._record_call("get_lifecycle", "success", start_time)
        return BucketMetadata(name=bucket, lifecycle_rules=rules)

    def update(self, bucket: str, metadata: BucketMetadata) -> BucketMetadata:
        """Replace the bucket's lifecycle configuration.

        S3 rejects an empty rule list, so an empty rule set deletes the
        lifecycle configuration instead.
        """
        start_time = time.time()
        try:
            if not metadata.lifecycle_rules:
                self.client.delete_bucket_lifecycle(Bucket=bucket)
            else:
                self.client.put_bucket_lifecycle_configuration(
                    Bucket=bucket,
                    LifecycleConfiguration={
                        "Rules": [rule_to_s3(rule) for rule in metadata.lifecycle_rules],
                    },
                )
        except (ClientError, BotoCoreError) as e:
            self._record_call("put_lifecycle", "failed", start_time)
            logger.error(f"Failed to set lifecycle for bucket {bucket}: {e}")
            raise translate_client_error(e, bucket, "update") from e

        self._record_call("put_lifecycle", "success", start_time)
        return metadata

    def _record_call(self, operation: str, result: str, start_time: float) -> None:
        metrics.api_call_total.labels(api_type="s3", operation=operation, result=result).inc()
        metrics.api_call_duration_seconds.labels(api_type="s3", operation=operation).observe(
            time.time() - start_time
        )


def _rule_filter(rule: dict[str, Any]) -> dict[str, Any]:
    """Flatten a rule's filter, including ``And`` and the legacy top-level prefix."""
    rule_filter = dict(rule.get("Filter") or {})
    if "Prefix" in rule:
        rule_filter.setdefault("Prefix", rule["Prefix"])
    combined = rule_filter.pop("And", None) or {}
    for key, value in combined.items():
        rule_filter.setdefault(key, value)
    return rule_filter


def _filter_tags(rule_filter: dict[str, Any]) -> tuple[tuple[str, str], ...]:
    tags = list(rule_filter.get("Tags", []))
    if "Tag" in rule_filter:
        tags.append(rule_filter["Tag"])
    return tuple((tag.get("Key", ""), tag.get("Value", "")) for tag in tags)


def _rule_actions(rule: dict[str, Any]) -> list[LifecycleAction]:
    actions = []
    if rule.get("Expiration") or rule.get("NoncurrentVersionExpiration"):
        actions.append(LifecycleAction(type=LIFECYCLE_ACTION_DELETE))
    transitions = rule.get("Transitions") or rule.get("NoncurrentVersionTransitions") or []
    if transitions:
        actions.append(
            LifecycleAction(type=ACTION_SET_STORAGE_CLASS, storage_class=transitions[0].get("StorageClass"))
        )
    if "AbortIncompleteMultipartUpload" in rule:
        actions.append(LifecycleAction(type=ACTION_ABORT_MULTIPART))
    return actions


def rule_from_s3(rule: dict[str, Any]) -> LifecycleRule:
    """Convert an S3 lifecycle rule into a LifecycleRule.

    A rule carrying several actions keeps the first as its action and lists the
    others in ``extra_actions``.
    """
    expiration = rule.get("Expiration", {})
    noncurrent = rule.get("NoncurrentVersionExpiration", {})
    transitions = rule.get("Transitions", []) + rule.get("NoncurrentVersionTransitions", [])
    rule_filter = _rule_filter(rule)

    condition = LifecycleCondition(
        age=expiration.get("Days"),
        created_before=str(expiration["Date"]) if "Date" in expiration else None,
        num_newer_versions=noncurrent.get("NewerNoncurrentVersions"),
        noncurrent_days=noncurrent.get("NoncurrentDays"),
        prefix=rule_filter.get("Prefix") or None,
        storage_classes=tuple(t["StorageClass"] for t in transitions if "StorageClass" in t),
        is_live=False if expiration.get("ExpiredObjectDeleteMarker") else None,
        tags=_filter_tags(rule_filter),
        object_size_greater_than=rule_filter.get("ObjectSizeGreaterThan"),
        object_size_less_than=rule_filter.get("ObjectSizeLessThan"),
    )

    actions = _rule_actions(rule) or [LifecycleAction(type=ACTION_UNKNOWN)]

    return LifecycleRule(
        condition=condition,
        action=actions[0],
        enabled=rule.get("Status", "Enabled") == "Enabled",
        rule_id=rule.get("ID"),
        extra_actions=tuple(action.type for action in actions[1:]),
    )


def rule_to_s3(rule: LifecycleRule) -> dict[str, Any]:
    """Convert a LifecycleRule into the S3 lifecycle rule format.

    Only age-based delete rules can be written.

    Raises:
        ValueError: If the rule cannot be expressed as an S3 expiration
    """
    if rule.action.type.lower() != LIFECYCLE_ACTION_DELETE.lower() or rule.condition.age is None:
        raise ValueError(f"Unsupported lifecycle rule: {rule}")
    if rule.condition.extra_fields():
        raise ValueError(f"Unsupported lifecycle condition fields: {rule.condition.extra_fields()}")
    if rule.extra_actions:
        raise ValueError(f"Unsupported lifecycle actions: {list(rule.extra_actions)}")

    days = rule.condition.age
    return {
        "ID": rule.rule_id or LIFECYCLE_RULE_ID_TEMPLATE.format(days=days),
        "Status": "Enabled" if rule.enabled else "Disabled",
        "Filter": {"Prefix": ""},
        "Expiration": {"Days": days},
    }
