"""Builder for storage client instances."""

from __future__ import annotations

import os

from ..services.aws.client import AWSStorageClient


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def create_storage_client_from_env() -> AWSStorageClient:
    """Create a storage client from environment variables.

    Environment Variables:
        S3_ENDPOINT_URL: S3 endpoint URL (default: AWS)
        AWS_REGION: Region (default: us-east-1)
        S3_PATH_STYLE: Use path-style addressing (default: true)
        S3_INSECURE_SKIP_VERIFY: Skip TLS verification (default: false)
        AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_SESSION_TOKEN: Optional
            static credentials; the boto3 credential chain applies otherwise

    Returns:
        Configured storage client

    Raises:
        ValueError: If only one half of the static key pair is set
    """
    access_key = os.getenv("AWS_ACCESS_KEY_ID") or None
    secret_key = os.getenv("AWS_SECRET_ACCESS_KEY") or None
    if bool(access_key) != bool(secret_key):
        raise ValueError("AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set together")

    return AWSStorageClient(
        endpoint=os.getenv("S3_ENDPOINT_URL") or None,
        region=os.getenv("AWS_REGION", "us-east-1"),
        access_key=access_key,
        secret_key=secret_key,
        session_token=os.getenv("AWS_SESSION_TOKEN") or None,
        path_style=_env_flag("S3_PATH_STYLE", "true"),
        insecure_skip_verify=_env_flag("S3_INSECURE_SKIP_VERIFY", "false"),
    )
