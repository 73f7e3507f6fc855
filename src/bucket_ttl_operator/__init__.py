"""Bucket TTL Operator: keeps a single expiration rule on object-storage buckets."""

__version__ = "0.1.0"
