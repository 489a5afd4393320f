"""
Cloud service adapters.

- aws: AWS Secrets Manager, SQS and S3 (boto3-based), also usable with LocalStack
"""

from cloudwrap_lib.cal.adapters.aws import (
    AWSCloudClient,
    AWSObjectStorage,
    AWSQueue,
    AWSSecretStore,
    create_botocore_config,
    create_service_client,
    create_session,
)

__all__ = [
    "AWSCloudClient",
    "AWSObjectStorage",
    "AWSQueue",
    "AWSSecretStore",
    "create_botocore_config",
    "create_service_client",
    "create_session",
]
