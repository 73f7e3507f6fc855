"""Shared fixtures for unit tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from bucket_ttl_operator.services.storage.models import (
    BucketMetadata,
    LifecycleAction,
    LifecycleCondition,
    LifecycleRule,
)

BUCKET_NAME = "ma-bucket"
BUCKET_URI = f"s3://{BUCKET_NAME}"
TTL = 42
BAD_TTL = 420


@dataclass
class ExpectedCall:
    """A storage call the test expects, with its canned outcome."""

    operation: str
    bucket: str
    response: Any = None
    error: Exception | None = None
    check: Callable[[BucketMetadata], None] | None = None
    pass_through: bool = False


@dataclass
class ScriptedStorageClient:
    """Storage client double that replays expected calls in order.

    ``update`` calls registered with ``pass_through`` return the metadata they
    were given, after running the optional ``check`` on it.
    """

    expected: list[ExpectedCall] = field(default_factory=list)
    seen: list[tuple[str, str, Any]] = field(default_factory=list)
    unexpected: list[tuple[str, str]] = field(default_factory=list)

    def when_get(self, bucket: str, response: BucketMetadata | None = None, error: Exception | None = None) -> None:
        self.expected.append(ExpectedCall("get", bucket, response=response, error=error))

    def when_update(
        self,
        bucket: str,
        check: Callable[[BucketMetadata], None] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.expected.append(ExpectedCall("update", bucket, error=error, check=check, pass_through=True))

    def _next(self, operation: str, bucket: str) -> ExpectedCall:
        if not self.expected or self.expected[0].operation != operation or self.expected[0].bucket != bucket:
            self.unexpected.append((operation, bucket))
            raise AssertionError(f"unexpected {operation} call for bucket {bucket}")
        return self.expected.pop(0)

    def get(self, bucket: str) -> BucketMetadata:
        call = self._next("get", bucket)
        self.seen.append(("get", bucket, None))
        if call.error is not None:
            raise call.error
        return call.response

    def update(self, bucket: str, metadata: BucketMetadata) -> BucketMetadata:
        call = self._next("update", bucket)
        self.seen.append(("update", bucket, metadata))
        if call.error is not None:
            raise call.error
        if call.check is not None:
            call.check(metadata)
        return metadata

    def saw_all(self) -> bool:
        return not self.expected

    def saw_unexpected(self) -> bool:
        return bool(self.unexpected)

    @property
    def updates(self) -> list[BucketMetadata]:
        return [metadata for operation, _, metadata in self.seen if operation == "update"]


@pytest.fixture
def storage_client() -> Any:
    """Create a scripted storage client and verify it saw exactly what was expected."""
    client = ScriptedStorageClient()
    yield client
    assert client.saw_all(), f"expected calls never made: {client.expected}"
    assert not client.saw_unexpected(), f"unexpected calls: {client.unexpected}"


def make_rule(
    age: int | None = None,
    action: str = "Delete",
    **condition: Any,
) -> LifecycleRule:
    """Build a lifecycle rule for tests."""
    return LifecycleRule(
        condition=LifecycleCondition(age=age, **condition),
        action=LifecycleAction(type=action),
    )


def make_bucket(*rules: LifecycleRule) -> BucketMetadata:
    """Build bucket metadata carrying ``rules``."""
    return BucketMetadata(name=BUCKET_NAME, lifecycle_rules=tuple(rules))
