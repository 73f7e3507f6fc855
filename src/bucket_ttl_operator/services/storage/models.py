"""Models for bucket lifecycle state."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from ...constants import LIFECYCLE_ACTION_DELETE


@dataclass(frozen=True)
class LifecycleCondition:
    """Condition half of a lifecycle rule.

    Only ``age`` is understood by the reconciler. The remaining fields exist so
    that rules fetched from a bucket can be recognised as something other than a
    plain age-based expiration.
    """

    age: int | None = None
    created_before: str | None = None
    num_newer_versions: int | None = None
    noncurrent_days: int | None = None
    prefix: str | None = None
    storage_classes: tuple[str, ...] = ()
    is_live: bool | None = None
    tags: tuple[tuple[str, str], ...] = ()
    object_size_greater_than: int | None = None
    object_size_less_than: int | None = None

    def extra_fields(self) -> list[str]:
        """Return the names of every set field other than ``age``."""
        extras = []
        if self.created_before is not None:
            extras.append("created_before")
        if self.num_newer_versions is not None:
            extras.append("num_newer_versions")
        if self.noncurrent_days is not None:
            extras.append("noncurrent_days")
        if self.prefix:
            extras.append("prefix")
        if self.storage_classes:
            extras.append("storage_classes")
        if self.is_live is not None:
            extras.append("is_live")
        if self.tags:
            extras.append("tags")
        if self.object_size_greater_than is not None:
            extras.append("object_size_greater_than")
        if self.object_size_less_than is not None:
            extras.append("object_size_less_than")
        return extras


@dataclass(frozen=True)
class LifecycleAction:
    """Action half of a lifecycle rule."""

    type: str
    storage_class: str | None = None


@dataclass(frozen=True)
class LifecycleRule:
    """A (condition, action) pair applied by the storage service.

    ``extra_actions`` names any further actions the storage service performs
    under the same rule.
    """

    condition: LifecycleCondition
    action: LifecycleAction
    enabled: bool = True
    rule_id: str | None = None
    extra_actions: tuple[str, ...] = ()

    @classmethod
    def delete_after(cls, days: int) -> LifecycleRule:
        """Build the canonical rule deleting objects older than ``days``."""
        return cls(
            condition=LifecycleCondition(age=days),
            action=LifecycleAction(type=LIFECYCLE_ACTION_DELETE),
        )

    def is_delete_by_age(self, days: int) -> bool:
        """Check whether this rule only deletes objects older than ``days``.

        Action type matching is case-insensitive.
        """
        if not self.enabled or self.extra_actions:
            return False
        if self.condition.age != days or self.condition.extra_fields():
            return False
        return (self.action.type or "").lower() == LIFECYCLE_ACTION_DELETE.lower()


@dataclass(frozen=True)
class BucketMetadata:
    """Bucket metadata relevant to lifecycle management."""

    name: str
    lifecycle_rules: tuple[LifecycleRule, ...] = field(default_factory=tuple)

    def with_lifecycle(self, rules: Iterable[LifecycleRule]) -> BucketMetadata:
        """Return a copy whose lifecycle rule set is replaced by ``rules``."""
        return replace(self, lifecycle_rules=tuple(rules))


def bucket_name_from_ref(bucket_ref: str) -> str:
    """Strip a ``scheme://`` prefix and trailing slashes from a bucket reference.

    >>> bucket_name_from_ref("s3://logs-bucket/")
    'logs-bucket'
    """
    name = bucket_ref.strip()
    if "://" in name:
        name = name.split("://", 1)[1]
    return name.rstrip("/")
