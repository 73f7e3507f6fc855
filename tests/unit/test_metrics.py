"""Tests for Prometheus metrics."""

from __future__ import annotations

from bucket_ttl_operator.metrics import (
    api_call_duration_seconds,
    api_call_total,
    drift_detected_total,
    error_total,
    lifecycle_operations_total,
    reconcile_duration_seconds,
    reconcile_total,
    resource_status_total,
)


class TestMetricsExist:
    """Test that all expected metrics are defined."""

    def test_reconcile_total_exists(self):
        """Test reconcile_total counter exists."""
        # Prometheus counters don't include "_total" in their _name attribute
        assert reconcile_total._name == "bucket_ttl_operator_reconcile"

    def test_reconcile_duration_exists(self):
        assert reconcile_duration_seconds._name == "bucket_ttl_operator_reconcile_duration_seconds"

    def test_lifecycle_operations_total_exists(self):
        assert lifecycle_operations_total._name == "bucket_ttl_operator_lifecycle_operations"

    def test_drift_detected_total_exists(self):
        assert drift_detected_total._name == "bucket_ttl_operator_drift_detected"

    def test_api_call_total_exists(self):
        assert api_call_total._name == "bucket_ttl_operator_api_call"

    def test_api_call_duration_exists(self):
        assert api_call_duration_seconds._name == "bucket_ttl_operator_api_call_duration_seconds"

    def test_error_total_exists(self):
        assert error_total._name == "bucket_ttl_operator_error"

    def test_resource_status_total_exists(self):
        assert resource_status_total._name == "bucket_ttl_operator_resource_status"


class TestMetricOperations:
    """Test metric operations."""

    def test_counter_increment(self):
        """Test that counters can be incremented."""
        initial = lifecycle_operations_total.labels(operation="replace", result="test")._value.get()

        lifecycle_operations_total.labels(operation="replace", result="test").inc()

        new_value = lifecycle_operations_total.labels(operation="replace", result="test")._value.get()
        assert new_value == initial + 1

    def test_different_label_values_independent(self):
        """Test that metrics with different labels are independent."""
        drift_detected_total.labels(kind="TestIndependent", resource_type="a").inc(3)
        drift_detected_total.labels(kind="TestIndependent", resource_type="b").inc(5)

        assert drift_detected_total.labels(kind="TestIndependent", resource_type="a")._value.get() == 3
        assert drift_detected_total.labels(kind="TestIndependent", resource_type="b")._value.get() == 5

    def test_histogram_observe(self):
        """Test that histograms accept observations."""
        api_call_duration_seconds.labels(api_type="s3", operation="get_lifecycle").observe(0.05)
        reconcile_duration_seconds.labels(kind="ExpiringBucket").observe(1.0)
