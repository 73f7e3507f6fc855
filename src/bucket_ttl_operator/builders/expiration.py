"""Builder for expiration configurations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from ..services.storage.models import bucket_name_from_ref

_T = TypeVar("_T")


def resolve_field(primary: _T | None, legacy: _T | None) -> _T | None:
    """Return ``primary`` unless it is None or empty, otherwise ``legacy``."""
    if primary is None or primary == "":
        return legacy
    return primary


@dataclass(frozen=True)
class ExpirationConfig:
    """Resolved expiration settings for a bucket."""

    bucket: str
    ttl: int

    @property
    def bucket_name(self) -> str:
        """Bucket name without any scheme prefix."""
        return bucket_name_from_ref(self.bucket)


def create_expiration_config_from_spec(spec: dict[str, Any]) -> ExpirationConfig:
    """Create an expiration configuration from CRD spec.

    ``bucket`` and ``ttl`` take precedence over the deprecated ``bucketName``
    and ``ttlDays`` fields.

    Args:
        spec: ExpiringBucket CRD spec

    Returns:
        Resolved expiration configuration

    Raises:
        ValueError: If the bucket is missing or the ttl is not a positive integer
    """
    bucket = resolve_field(spec.get("bucket"), spec.get("bucketName"))
    ttl = resolve_field(spec.get("ttl"), spec.get("ttlDays"))

    if not bucket or not bucket_name_from_ref(str(bucket)):
        raise ValueError("bucket (or legacy bucketName) is required")
    if ttl is None:
        raise ValueError("ttl (or legacy ttlDays) is required")
    if isinstance(ttl, bool):
        raise ValueError(f"ttl must be a positive integer, got {ttl!r}")
    try:
        ttl_days = int(ttl)
    except (TypeError, ValueError) as e:
        raise ValueError(f"ttl must be a positive integer, got {ttl!r}") from e
    if ttl_days <= 0 or str(ttl_days) != str(ttl).strip():
        raise ValueError(f"ttl must be a positive integer, got {ttl!r}")

    return ExpirationConfig(bucket=str(bucket), ttl=ttl_days)
