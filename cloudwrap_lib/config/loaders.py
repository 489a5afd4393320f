"""
Configuration loading for the cloud client.

Settings are resolved in three steps, later steps winning:

1. Model defaults (us-east-1, 10 second timeout, AWSCURRENT)
2. An optional YAML file, either flat or nested under a ``cloudwrap:`` key
3. ``CLOUDWRAP_*`` environment variables
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from cloudwrap_lib.config.schemas import CloudClientConfig
from cloudwrap_lib.exceptions import CloudWrapConfigurationError

CONFIG_SECTION = "cloudwrap"

# Environment variable -> config field
ENV_OVERRIDES = {
    "CLOUDWRAP_REGION": "region",
    "CLOUDWRAP_PROFILE": "profile_name",
    "CLOUDWRAP_ENDPOINT_URL": "endpoint_url",
    "CLOUDWRAP_TIMEOUT_SECONDS": "timeout_seconds",
    "CLOUDWRAP_VERSION_STAGE": "version_stage",
    "CLOUDWRAP_VERIFY_SSL": "verify_ssl",
}


def load_config_file(config_path: Path) -> dict[str, Any]:
    """
    Read raw settings from a YAML file.

    Args:
    ----
        config_path: Path to the YAML file

    Returns:
    -------
        Settings dictionary (the ``cloudwrap:`` section if present)

    Raises:
    ------
        CloudWrapConfigurationError: If the file is missing, unparsable or not a mapping

    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise CloudWrapConfigurationError(f"Client configuration not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CloudWrapConfigurationError(f"Failed to parse {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CloudWrapConfigurationError(
            f"Invalid client configuration in {config_path}: expected a mapping, got {type(data).__name__}"
        )

    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise CloudWrapConfigurationError(f"Invalid '{CONFIG_SECTION}' section in {config_path}: expected a mapping")
    return section


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect CLOUDWRAP_* overrides present in ``environ`` (defaults to os.environ)."""
    if environ is None:
        environ = os.environ
    return {field: environ[var] for var, field in ENV_OVERRIDES.items() if environ.get(var)}


def load_client_config(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> CloudClientConfig:
    """
    Build a validated CloudClientConfig.

    Args:
    ----
        config_path: Optional YAML file with client settings
        environ: Environment to read CLOUDWRAP_* variables from (defaults to os.environ)
        **overrides: Explicit field values, applied last (e.g. region="eu-west-1")

    Returns:
    -------
        Validated, immutable CloudClientConfig

    Raises:
    ------
        CloudWrapConfigurationError: If the file cannot be read or validation fails

    Example:
    -------
        ```python
        from cloudwrap_lib.config import load_client_config

        cfg = load_client_config("cloudwrap.yaml", region="eu-west-1")
        ```

    """
    data: dict[str, Any] = {}
    if config_path is not None:
        data.update(load_config_file(Path(config_path)))
    data.update(env_overrides(environ))
    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CloudClientConfig(**data)
    except ValidationError as e:
        source = f" in {config_path}" if config_path is not None else ""
        raise CloudWrapConfigurationError(f"Invalid client configuration{source}: {e}") from e
