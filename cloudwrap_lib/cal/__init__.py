"""
CloudWrap Cloud Abstraction Layer (CAL).

Provider-agnostic capability protocols plus the AWS adapter behind them:
- Secret retrieval (Secrets Manager)
- Message queues (SQS)
- Object uploads (S3)
- Client factory and dependency injection

Example:
-------
    >>> from cloudwrap_lib.cal import create_cloud_client
    >>>
    >>> with create_cloud_client(region="us-east-1") as client:
    ...     bundle = client.fetch_secret_bundle("app/config")
    ...     queue_url = client.resolve_queue_url("jobs")
    ...     client.enqueue_message_with_attributes("hello", queue_url, {"attempt": 1})

"""

from cloudwrap_lib.cal.factory import create_cloud_client
from cloudwrap_lib.cal.ioc import CloudIoCContainer, create_cloud_container, get_cloud_container, reset_cloud_container
from cloudwrap_lib.cal.protocols import (
    CloudClientProtocol,
    ObjectStorageProtocol,
    QueueProtocol,
    SecretStoreProtocol,
)

__all__ = [
    "CloudClientProtocol",
    "ObjectStorageProtocol",
    "QueueProtocol",
    "SecretStoreProtocol",
    "create_cloud_client",
    "CloudIoCContainer",
    "create_cloud_container",
    "get_cloud_container",
    "reset_cloud_container",
]
