"""
AWS Cloud Adapter.

This module provides the boto3-backed implementations of the cloud client protocols:
- AWSSecretStore (Secrets Manager)
- AWSQueue (SQS)
- AWSObjectStorage (S3)
- AWSCloudClient (session handle plus the three adapters above)

Every service client is built from one boto3 session with a botocore Config that
carries the per-call timeout. Provider and network errors are never caught here.
"""

import logging
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any

import boto3
from botocore.client import Config
from botocore.exceptions import ProfileNotFound

from cloudwrap_lib.cal.protocols import ObjectStorageProtocol, QueueProtocol, SecretStoreProtocol
from cloudwrap_lib.config.schemas import DEFAULT_VERSION_STAGE, CloudClientConfig
from cloudwrap_lib.exceptions import CloudWrapConfigurationError, MessageNotSentError, QueueResolutionError
from cloudwrap_lib.secrets import apply_bundle_to_environment, decode_secret_payload
from cloudwrap_lib.utils import normalize_bucket_name, stringify_message_attributes

LOGGER = logging.getLogger(__name__)


def create_session(config: CloudClientConfig) -> Any:
    """
    Create the boto3 session the client is bound to.

    Args:
    ----
        config: Client configuration (region, optional profile)

    Returns:
    -------
        boto3.Session with resolved credentials

    Raises:
    ------
        CloudWrapConfigurationError: If the profile is unknown or no credentials can be resolved

    """
    kwargs: dict[str, Any] = {"region_name": config.region}
    if config.profile_name:
        kwargs["profile_name"] = config.profile_name

    try:
        session = boto3.Session(**kwargs)
    except ProfileNotFound as e:
        raise CloudWrapConfigurationError(f"AWS profile not found: {config.profile_name}") from e

    if session.get_credentials() is None:
        raise CloudWrapConfigurationError(
            f"No AWS credentials could be resolved for region {config.region}"
            + (f" (profile: {config.profile_name})" if config.profile_name else "")
        )

    LOGGER.debug(f"Created boto3 session (region: {config.region}, profile: {config.profile_name or 'default'})")
    return session


def create_botocore_config(config: CloudClientConfig) -> Config:
    """
    Build the botocore Config applying the per-call timeout.

    A single attempt is made so the connect/read timeout bounds the whole call.
    """
    return Config(
        region_name=config.region,
        connect_timeout=config.timeout_seconds,
        read_timeout=config.timeout_seconds,
        retries={"total_max_attempts": 1},
    )


def create_service_client(session: Any, service: str, config: CloudClientConfig, client_config: Config) -> Any:
    """
    Create a boto3 client for the specified service.

    Args:
    ----
        session: boto3 session
        service: Service name (s3, sqs, secretsmanager)
        config: Client configuration (endpoint, SSL verification)
        client_config: botocore Config with timeouts

    Returns:
    -------
        Configured boto3 client

    """
    kwargs: dict[str, Any] = {
        "service_name": service,
        "config": client_config,
    }

    # Endpoint override (LocalStack)
    if config.endpoint_url:
        kwargs["endpoint_url"] = config.endpoint_url

    if not config.verify_ssl:
        kwargs["verify"] = False

    LOGGER.debug(f"Creating {service} client (endpoint: {config.endpoint_url or 'default'})")
    return session.client(**kwargs)


class _ClientAdapter:
    """Shared lifecycle for adapters wrapping a single boto3 client."""

    def __init__(self, client: Any):
        self._client = client

    def close(self) -> None:
        """Close the underlying boto3 client."""
        if hasattr(self._client, "close"):
            self._client.close()


class AWSSecretStore(_ClientAdapter):
    """AWS Secrets Manager implementation."""

    def __init__(self, client: Any, version_stage: str = DEFAULT_VERSION_STAGE):
        """
        Initialize AWS secret store adapter.

        Args:
        ----
            client: boto3 Secrets Manager client
            version_stage: Version stage requested when none is given per call

        """
        super().__init__(client)
        self._version_stage = version_stage

    def fetch_secret_bundle(self, secret_name: str, version_stage: str | None = None) -> dict[str, str]:
        """Fetch the secret and decode it into a bundle."""
        stage = version_stage or self._version_stage
        LOGGER.debug(f"Fetching secret '{secret_name}' (stage: {stage})")

        response = self._client.get_secret_value(SecretId=secret_name, VersionStage=stage)
        bundle = decode_secret_payload(secret_name, response)

        LOGGER.debug(f"Decoded secret '{secret_name}' ({len(bundle)} keys)")
        return bundle

    def fetch_secret_field(self, secret_name: str, field_name: str) -> str:
        """Fetch the secret and return one field, or "" if it is absent."""
        return self.fetch_secret_bundle(secret_name).get(field_name, "")


class AWSQueue(_ClientAdapter):
    """AWS SQS implementation."""

    def resolve_queue_url(self, queue_name: str) -> str:
        """Look up the URL of a queue by name."""
        response = self._client.get_queue_url(QueueName=queue_name)
        queue_url = response.get("QueueUrl")
        if not queue_url:
            raise QueueResolutionError(f"Queue lookup for '{queue_name}' returned no QueueUrl")
        return queue_url

    def send_message(
        self,
        queue_url: str,
        message_body: str,
        message_attributes: Mapping[str, Any] | None = None,
    ) -> str:
        """Send a message to the queue."""
        kwargs: dict[str, Any] = {
            "QueueUrl": queue_url,
            "MessageBody": message_body,
        }
        if message_attributes:
            kwargs["MessageAttributes"] = stringify_message_attributes(message_attributes)

        response = self._client.send_message(**kwargs)

        message_id = response.get("MessageId")
        if not message_id:
            raise MessageNotSentError(f"Message was not sent. Payload: {message_body}", payload=message_body)

        LOGGER.debug(f"Sent message {message_id} to {queue_url}")
        return message_id


class AWSObjectStorage(_ClientAdapter):
    """AWS S3 object storage implementation."""

    def upload_object(
        self,
        local_path: Path | str,
        bucket_name: str,
        object_key: str,
        content_type: str,
    ) -> None:
        """Upload a local file as a private, AES256-encrypted attachment."""
        with open(local_path, "rb") as f:
            body = f.read()

        bucket = normalize_bucket_name(bucket_name)
        LOGGER.debug(f"Uploading {local_path} to s3://{bucket}/{object_key} ({len(body)} bytes)")

        self._client.put_object(
            Bucket=bucket,
            Key=object_key,
            ACL="private",
            Body=body,
            ContentLength=len(body),
            ContentType=content_type,
            ContentDisposition="attachment",
            ServerSideEncryption="AES256",
        )


class AWSCloudClient:
    """
    Cloud client for AWS.

    Holds the boto3 session and the three service adapters built from it. All
    operations are stateless request/response calls, so one instance can be
    shared between callers.

    Example:
    -------
        ```python
        from cloudwrap_lib.cal import create_cloud_client

        with create_cloud_client(region="us-east-1") as client:
            db_password = client.fetch_secret_field("app/db", "password")
            queue_url = client.resolve_queue_url("jobs")
            client.enqueue_message('{"job": 1}', queue_url)
        ```

    """

    def __init__(
        self,
        session: Any,
        secret_store: SecretStoreProtocol,
        queue: QueueProtocol,
        object_storage: ObjectStorageProtocol,
    ):
        """
        Initialize the AWS cloud client.

        Args:
        ----
            session: boto3 session the adapters were built from
            secret_store: Secrets Manager adapter
            queue: SQS adapter
            object_storage: S3 adapter

        """
        self._session = session
        self._secret_store = secret_store
        self._queue = queue
        self._object_storage = object_storage

    @property
    def session(self) -> Any:
        """The boto3 session backing this client."""
        return self._session

    @property
    def region(self) -> str:
        """Region the session is bound to."""
        return self._session.region_name

    def fetch_secret_bundle(self, secret_name: str, version_stage: str | None = None) -> dict[str, str]:
        """Fetch and decode a secret into a bundle."""
        return self._secret_store.fetch_secret_bundle(secret_name, version_stage)

    def fetch_secret_field(self, secret_name: str, field_name: str) -> str:
        """Fetch a single field from a secret ("" if absent)."""
        return self._secret_store.fetch_secret_field(secret_name, field_name)

    def secrets_for_environment(self, secret_name: str) -> dict[str, str]:
        """Return the bundle to inject into an environment, without touching it."""
        return self.fetch_secret_bundle(secret_name)

    def apply_secrets_to_environment(
        self,
        secret_name: str,
        environ: MutableMapping[str, str] | None = None,
    ) -> list[str]:
        """
        Write every key of a secret into ``environ`` (defaults to os.environ).

        Stops on the first key that cannot be set; earlier keys stay set.

        Returns:
        -------
            Keys written

        Raises:
        ------
            EnvironmentInjectionError: If a key cannot be set

        """
        return apply_bundle_to_environment(self.secrets_for_environment(secret_name), environ)

    def resolve_queue_url(self, queue_name: str) -> str:
        """Resolve a queue name to its URL."""
        return self._queue.resolve_queue_url(queue_name)

    def enqueue_message(self, payload: str, queue_url: str) -> str:
        """Send a message and return its id."""
        return self._queue.send_message(queue_url, payload)

    def enqueue_message_with_attributes(
        self,
        payload: str,
        queue_url: str,
        attributes: Mapping[str, Any],
    ) -> str:
        """Send a message with string-typed attributes and return its id."""
        return self._queue.send_message(queue_url, payload, message_attributes=attributes)

    def upload_object(
        self,
        local_path: Path | str,
        bucket_name: str,
        object_key: str,
        content_type: str,
    ) -> None:
        """Upload a local file to object storage."""
        self._object_storage.upload_object(local_path, bucket_name, object_key, content_type)

    def close(self) -> None:
        """Close all client connections and cleanup resources."""
        for adapter in (self._secret_store, self._queue, self._object_storage):
            if hasattr(adapter, "close"):
                adapter.close()

    def __enter__(self) -> "AWSCloudClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit with cleanup."""
        self.close()
