"""Reconciliation of bucket lifecycle rules against a desired TTL."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .services.storage.base import StorageClient
from .services.storage.models import LifecycleRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of a single lifecycle reconciliation."""

    bucket: str
    ttl: int
    changed: bool
    previous_rules: tuple[LifecycleRule, ...]
    rules: tuple[LifecycleRule, ...]


def has_expected_lifecycle(rules: Sequence[LifecycleRule], ttl: int) -> bool:
    """Check whether ``rules`` is exactly one rule deleting objects older than ``ttl`` days.

    Several rules are never accepted, even when each of them is correct on its
    own.
    """
    return len(rules) == 1 and rules[0].is_delete_by_age(ttl)


class LifecycleReconciler:
    """Ensures a bucket carries a single delete-after-TTL lifecycle rule.

    Errors raised by the storage client are not caught; retries belong to the
    caller.
    """

    def __init__(self, client: StorageClient) -> None:
        self.client = client

    def apply(self, bucket: str, ttl: int) -> ReconcileResult:
        """Reconcile the lifecycle of ``bucket`` to expire objects after ``ttl`` days.

        Args:
            bucket: Bucket name
            ttl: Number of days after which objects are deleted

        Returns:
            Reconcile result; ``changed`` is False when no update was issued

        Raises:
            ValueError: If ttl is not a positive integer
        """
        if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0:
            raise ValueError(f"ttl must be a positive integer, got {ttl!r}")

        current = self.client.get(bucket)
        previous_rules = tuple(current.lifecycle_rules)

        if has_expected_lifecycle(previous_rules, ttl):
            logger.debug(f"Bucket {bucket} already expires objects after {ttl} days")
            return ReconcileResult(
                bucket=bucket,
                ttl=ttl,
                changed=False,
                previous_rules=previous_rules,
                rules=previous_rules,
            )

        logger.info(
            f"Replacing {len(previous_rules)} lifecycle rule(s) on bucket {bucket} "
            f"with expiration after {ttl} days"
        )
        desired = current.with_lifecycle([LifecycleRule.delete_after(ttl)])
        updated = self.client.update(bucket, desired)
        return ReconcileResult(
            bucket=bucket,
            ttl=ttl,
            changed=True,
            previous_rules=previous_rules,
            rules=tuple(updated.lifecycle_rules),
        )
