"""Utility functions for cloudwrap-lib."""

from collections.abc import Mapping
from typing import Any


def normalize_bucket_name(bucket_name: str) -> str:
    """
    Strip any colon-delimited qualifier from a bucket name.

    Only the part after the last colon is kept, so a bucket ARN can be passed
    wherever a bucket name is expected.

    Example:
    -------
        ```python
        normalize_bucket_name("arn:aws:s3:::my-bucket")  # "my-bucket"
        normalize_bucket_name("my-bucket")  # "my-bucket"
        ```

    """
    if ":" in bucket_name:
        return bucket_name.rsplit(":", 1)[-1]
    return bucket_name


def stringify_message_attributes(attributes: Mapping[str, Any]) -> dict[str, dict[str, str]]:
    """
    Convert plain attribute values to SQS string-typed message attributes.

    Every value is rendered with ``str()`` and sent with ``DataType="String"``.
    """
    return {key: {"DataType": "String", "StringValue": str(value)} for key, value in attributes.items()}
