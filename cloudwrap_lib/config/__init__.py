"""CloudWrap configuration management."""

from cloudwrap_lib.config.loaders import env_overrides, load_client_config, load_config_file
from cloudwrap_lib.config.schemas import (
    DEFAULT_REGION,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_VERSION_STAGE,
    CloudClientConfig,
)

__all__ = [
    "CloudClientConfig",
    "DEFAULT_REGION",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_VERSION_STAGE",
    "env_overrides",
    "load_client_config",
    "load_config_file",
]
