"""
Cloud Client Factory.

Usage:
------
    >>> from cloudwrap_lib.cal.factory import create_cloud_client
    >>> client = create_cloud_client(region="us-east-1")
    >>> client.fetch_secret_bundle("app/config")
    {'DB_HOST': 'db.internal', 'DB_PASSWORD': '...'}

"""

from pathlib import Path
from typing import Any

from cloudwrap_lib.cal.ioc import create_cloud_container
from cloudwrap_lib.cal.protocols import CloudClientProtocol
from cloudwrap_lib.config import CloudClientConfig, load_client_config


def create_cloud_client(
    region: str | None = None,
    config: CloudClientConfig | None = None,
    config_path: Path | str | None = None,
    **overrides: Any,
) -> CloudClientProtocol:
    """
    Create a cloud client bound to one region.

    When no config is given, one is loaded from ``config_path`` (optional) and
    CLOUDWRAP_* environment variables; ``region`` and ``overrides`` win over both.

    Args:
    ----
        region: Region to bind the session to (defaults to the configured region)
        config: Explicit configuration, bypassing the loaders
        config_path: Optional YAML file with client settings
        **overrides: Additional CloudClientConfig fields (e.g. endpoint_url)

    Returns:
    -------
        CloudClientProtocol: AWS-backed client

    Raises:
    ------
        CloudWrapConfigurationError: If configuration is invalid or no credentials resolve

    """
    if config is None:
        config = load_client_config(config_path, region=region, **overrides)
    elif region is not None:
        config = config.model_copy(update={"region": region})

    container = create_cloud_container(config)
    return container.cloud_client()
