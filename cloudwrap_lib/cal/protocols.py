"""
Cloud Client Protocol Definitions.

This module defines protocols (structural typing) for the cloud capabilities the
client exposes. Any implementation matching the interface can be used, which keeps
callers independent of boto3 and easy to fake in tests.

Key protocols:
- SecretStoreProtocol: Secret retrieval (AWS Secrets Manager)
- QueueProtocol: Queue lookup and message sending (AWS SQS)
- ObjectStorageProtocol: Object uploads (AWS S3)
- CloudClientProtocol: The combined client surface
"""

from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SecretStoreProtocol(Protocol):
    """
    Protocol for secret retrieval.

    Implementations return decoded secret bundles (``dict[str, str]``) and let
    provider errors propagate unchanged.
    """

    def fetch_secret_bundle(self, secret_name: str, version_stage: str | None = None) -> dict[str, str]:
        """
        Fetch and decode a secret into a bundle.

        Args:
        ----
            secret_name: Secret name or ARN
            version_stage: Version stage (defaults to the configured stage, AWSCURRENT)

        Returns:
        -------
            Secret bundle mapping key to value

        Raises:
        ------
            SecretDecodeError: If the payload cannot be decoded
            botocore.exceptions.ClientError: On provider errors (unchanged)

        """
        ...

    def fetch_secret_field(self, secret_name: str, field_name: str) -> str:
        """
        Fetch a secret and return one field.

        Returns:
        -------
            The field value, or "" if the field is absent

        """
        ...


@runtime_checkable
class QueueProtocol(Protocol):
    """Protocol for SQS-compatible queue lookup and sending."""

    def resolve_queue_url(self, queue_name: str) -> str:
        """
        Resolve a queue name to its URL.

        Raises:
        ------
            QueueResolutionError: If the response carries no URL
            botocore.exceptions.ClientError: On provider errors (unchanged)

        """
        ...

    def send_message(
        self,
        queue_url: str,
        message_body: str,
        message_attributes: Mapping[str, Any] | None = None,
    ) -> str:
        """
        Send a message to the queue.

        Args:
        ----
            queue_url: URL of the queue
            message_body: Message content
            message_attributes: Optional scalar attributes, sent as strings

        Returns:
        -------
            Message ID

        Raises:
        ------
            MessageNotSentError: If the send returns no message id

        """
        ...


@runtime_checkable
class ObjectStorageProtocol(Protocol):
    """Protocol for S3-compatible object uploads."""

    def upload_object(
        self,
        local_path: Path | str,
        bucket_name: str,
        object_key: str,
        content_type: str,
    ) -> None:
        """
        Upload a local file as a private, encrypted attachment.

        Args:
        ----
            local_path: File to upload (read fully into memory)
            bucket_name: Bucket name or ARN (qualifier before the last colon is dropped)
            object_key: Target key
            content_type: MIME type stored with the object

        """
        ...


@runtime_checkable
class CloudClientProtocol(Protocol):
    """
    Protocol for the combined cloud client.

    This is the capability surface applications depend on. The AWS-backed
    implementation lives in cloudwrap_lib.cal.adapters.aws.
    """

    @property
    def region(self) -> str:
        """Region the client was constructed for."""
        ...

    def fetch_secret_bundle(self, secret_name: str, version_stage: str | None = None) -> dict[str, str]:
        """Fetch and decode a secret into a bundle."""
        ...

    def fetch_secret_field(self, secret_name: str, field_name: str) -> str:
        """Fetch a single field from a secret ("" if absent)."""
        ...

    def secrets_for_environment(self, secret_name: str) -> dict[str, str]:
        """Return the bundle to inject into an environment, without touching it."""
        ...

    def apply_secrets_to_environment(
        self,
        secret_name: str,
        environ: MutableMapping[str, str] | None = None,
    ) -> list[str]:
        """Write a secret bundle into ``environ`` (defaults to os.environ)."""
        ...

    def resolve_queue_url(self, queue_name: str) -> str:
        """Resolve a queue name to its URL."""
        ...

    def enqueue_message(self, payload: str, queue_url: str) -> str:
        """Send a message and return its id."""
        ...

    def enqueue_message_with_attributes(
        self,
        payload: str,
        queue_url: str,
        attributes: Mapping[str, Any],
    ) -> str:
        """Send a message with string-typed attributes and return its id."""
        ...

    def upload_object(
        self,
        local_path: Path | str,
        bucket_name: str,
        object_key: str,
        content_type: str,
    ) -> None:
        """Upload a local file to object storage."""
        ...

    def close(self) -> None:
        """Close all client connections and cleanup resources."""
        ...

    def __enter__(self) -> "CloudClientProtocol":
        """Context manager entry."""
        ...

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit with cleanup."""
        ...
