"""Utility functions for the Bucket TTL Operator."""

from .conditions import (
    clear_lifecycle_apply_failed_condition,
    set_lifecycle_apply_failed_condition,
    set_ready_condition,
    update_condition,
)
from .errors import sanitize_error_message, sanitize_exception
from .events import emit_event

__all__ = [
    "update_condition",
    "set_ready_condition",
    "set_lifecycle_apply_failed_condition",
    "clear_lifecycle_apply_failed_condition",
    "sanitize_error_message",
    "sanitize_exception",
    "emit_event",
]
