"""
Cloud Client IoC Container.

This module wires the cloud client together with dependency-injector:

    CloudClientConfig -> boto3 session -> service clients -> adapters -> AWSCloudClient

Every provider can be overridden, so tests can swap the session or any boto3
client for a mock without touching the adapters.

Example:
-------
    ```python
    from cloudwrap_lib.cal.ioc import get_cloud_container
    from cloudwrap_lib.config import load_client_config

    container = get_cloud_container(load_client_config())
    client = container.cloud_client()

    # Override in tests
    container.session.override(mock_session)
    ```

"""

from dependency_injector import containers, providers

from cloudwrap_lib.cal.adapters.aws import (
    AWSCloudClient,
    AWSObjectStorage,
    AWSQueue,
    AWSSecretStore,
    create_botocore_config,
    create_service_client,
    create_session,
)
from cloudwrap_lib.config.schemas import CloudClientConfig


class CloudIoCContainer(containers.DeclarativeContainer):
    """
    Inversion of Control (IoC) container for the cloud client.

    Features:
    - One boto3 session per container (Singleton)
    - One boto3 client per service, sharing the session and timeout config
    - Adapters and the composite client created once and reused
    - Every provider overridable in tests
    """

    # Configuration input (dependency)
    config = providers.Dependency(instance_of=CloudClientConfig)

    session = providers.Singleton(create_session, config=config)

    botocore_config = providers.Singleton(create_botocore_config, config=config)

    secretsmanager_client = providers.Singleton(
        create_service_client,
        session=session,
        service="secretsmanager",
        config=config,
        client_config=botocore_config,
    )
    sqs_client = providers.Singleton(
        create_service_client,
        session=session,
        service="sqs",
        config=config,
        client_config=botocore_config,
    )
    s3_client = providers.Singleton(
        create_service_client,
        session=session,
        service="s3",
        config=config,
        client_config=botocore_config,
    )

    secret_store = providers.Singleton(
        AWSSecretStore,
        client=secretsmanager_client,
        version_stage=config.provided.version_stage,
    )
    queue = providers.Singleton(AWSQueue, client=sqs_client)
    object_storage = providers.Singleton(AWSObjectStorage, client=s3_client)

    cloud_client = providers.Singleton(
        AWSCloudClient,
        session=session,
        secret_store=secret_store,
        queue=queue,
        object_storage=object_storage,
    )


def create_cloud_container(config: CloudClientConfig) -> CloudIoCContainer:
    """
    Create a cloud IoC container with configuration.

    Args:
    ----
        config: Validated client configuration

    Returns:
    -------
        Configured cloud IoC container

    """
    container = CloudIoCContainer()
    container.config.override(config)
    return container


# Global singleton container (can be overridden in tests)
_global_container: CloudIoCContainer | None = None


def get_cloud_container(config: CloudClientConfig | None = None) -> CloudIoCContainer:
    """
    Get or create the global cloud IoC container.

    Args:
    ----
        config: Client configuration (required on first call)

    Returns:
    -------
        Global cloud IoC container

    Raises:
    ------
        ValueError: If called for the first time without a config

    """
    global _global_container

    if _global_container is None:
        if config is None:
            raise ValueError(
                "config is required on first call to get_cloud_container(). "
                "Subsequent calls can omit it to reuse the global container."
            )
        _global_container = create_cloud_container(config)

    return _global_container


def reset_cloud_container() -> None:
    """Reset the global cloud container (mainly for tests)."""
    global _global_container
    _global_container = None
