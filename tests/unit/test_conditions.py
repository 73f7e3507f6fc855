"""Unit tests for condition utilities."""

from __future__ import annotations

from bucket_ttl_operator.utils.conditions import (
    clear_lifecycle_apply_failed_condition,
    set_lifecycle_apply_failed_condition,
    set_ready_condition,
    update_condition,
)


class TestConditions:
    """Test condition utilities."""

    def test_update_condition_new(self) -> None:
        """Test adding a new condition."""
        result = update_condition(
            [], "TestCondition", "True", "TestReason", "Test message", observed_generation=1
        )

        assert len(result) == 1
        assert result[0]["type"] == "TestCondition"
        assert result[0]["status"] == "True"
        assert result[0]["reason"] == "TestReason"
        assert result[0]["message"] == "Test message"
        assert result[0]["observedGeneration"] == 1

    def test_update_condition_existing(self) -> None:
        """Test updating an existing condition."""
        conditions = [
            {
                "type": "TestCondition",
                "status": "False",
                "reason": "OldReason",
                "message": "Old message",
                "lastTransitionTime": "2023-01-01T00:00:00Z",
            }
        ]

        result = update_condition(
            conditions, "TestCondition", "True", "NewReason", "New message", observed_generation=2
        )

        assert len(result) == 1
        assert result[0]["status"] == "True"
        assert result[0]["reason"] == "NewReason"
        assert result[0]["lastTransitionTime"] != "2023-01-01T00:00:00Z"

    def test_update_condition_same_status_keeps_transition_time(self) -> None:
        """Test lastTransitionTime only moves when status changes."""
        conditions = [
            {
                "type": "Ready",
                "status": "True",
                "reason": "Ready",
                "message": "old",
                "lastTransitionTime": "2023-01-01T00:00:00Z",
            }
        ]

        result = set_ready_condition(conditions, True, "still ready")

        assert result[0]["lastTransitionTime"] == "2023-01-01T00:00:00Z"
        assert result[0]["message"] == "still ready"

    def test_set_ready_condition(self) -> None:
        """Test setting ready condition."""
        result = set_ready_condition([], False, "Not yet", observed_generation=1)

        assert result[0]["type"] == "Ready"
        assert result[0]["status"] == "False"
        assert result[0]["reason"] == "NotReady"

    def test_set_lifecycle_apply_failed_condition(self) -> None:
        """Test recording a failed lifecycle apply."""
        result = set_lifecycle_apply_failed_condition([], "denied", reason="Forbidden")

        assert result[0]["type"] == "LifecycleApplyFailed"
        assert result[0]["status"] == "True"
        assert result[0]["reason"] == "Forbidden"

    def test_clear_lifecycle_apply_failed_condition(self) -> None:
        """Test resolving a failed lifecycle apply."""
        conditions = set_lifecycle_apply_failed_condition([], "denied")

        result = clear_lifecycle_apply_failed_condition(conditions)

        assert result[0]["status"] == "False"
        assert result[0]["reason"] == "LifecycleApplied"

    def test_clear_without_failure_adds_nothing(self) -> None:
        """Test clearing is a no-op when no failure was recorded."""
        assert clear_lifecycle_apply_failed_condition([]) == []
