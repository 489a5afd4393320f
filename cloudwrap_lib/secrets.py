"""
Secret payload decoding and environment injection.

Secrets Manager returns either a ``SecretString`` (a JSON object) or a
``SecretBinary`` (a base64-encoded JSON object). Both are decoded here into a
secret bundle: a flat ``dict[str, str]``.

Every decode failure raises SecretDecodeError. Nothing is silently dropped.
"""

import base64
import binascii
import json
import logging
import os
from collections.abc import Mapping, MutableMapping
from typing import Any

from cloudwrap_lib.exceptions import EnvironmentInjectionError, SecretDecodeError

LOGGER = logging.getLogger(__name__)


def _parse_bundle(secret_name: str, text: str) -> dict[str, str]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SecretDecodeError(f"Secret '{secret_name}' payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SecretDecodeError(
            f"Secret '{secret_name}' payload must be a JSON object, got {type(data).__name__}"
        )

    non_strings = [key for key, value in data.items() if not isinstance(value, str)]
    if non_strings:
        raise SecretDecodeError(
            f"Secret '{secret_name}' has non-string values for keys: {', '.join(sorted(non_strings))}"
        )

    return data


def decode_secret_payload(secret_name: str, response: Mapping[str, Any]) -> dict[str, str]:
    """
    Decode a ``get_secret_value`` response into a secret bundle.

    Args:
    ----
        secret_name: Secret name, used in error messages only
        response: Raw boto3 ``get_secret_value`` response

    Returns:
    -------
        Secret bundle mapping key to value

    Raises:
    ------
        SecretDecodeError: If the payload is missing, not base64 (binary secrets),
            not UTF-8, not JSON, not a JSON object, or has non-string values

    """
    secret_string = response.get("SecretString")
    if secret_string is not None:
        return _parse_bundle(secret_name, secret_string)

    secret_binary = response.get("SecretBinary")
    if secret_binary is None:
        raise SecretDecodeError(f"Secret '{secret_name}' response has neither SecretString nor SecretBinary")

    try:
        if isinstance(secret_binary, str):
            secret_binary = secret_binary.encode("ascii")
        # Line breaks from wrapped encoders (base64 CLI, MIME) are not part of the payload
        decoded = base64.b64decode(bytes(secret_binary).translate(None, b"\r\n"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise SecretDecodeError(f"Secret '{secret_name}' binary payload is not valid base64: {e}") from e

    try:
        text = decoded.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SecretDecodeError(f"Secret '{secret_name}' binary payload is not UTF-8: {e}") from e

    return _parse_bundle(secret_name, text)


def apply_bundle_to_environment(
    bundle: Mapping[str, str],
    environ: MutableMapping[str, str] | None = None,
) -> list[str]:
    """
    Write every bundle entry into an environment mapping.

    Stops at the first key that cannot be set. Keys written before it stay set.

    Args:
    ----
        bundle: Secret bundle to apply
        environ: Target mapping (defaults to os.environ)

    Returns:
    -------
        Keys written, in bundle order

    Raises:
    ------
        EnvironmentInjectionError: If a key cannot be set (original error chained)

    """
    if environ is None:
        environ = os.environ

    applied: list[str] = []
    for key, value in bundle.items():
        try:
            environ[key] = value
        except (OSError, ValueError, TypeError, KeyError) as e:
            raise EnvironmentInjectionError(
                f"Failed to set environment variable '{key}' after {len(applied)} of {len(bundle)}: {e}",
                key=key,
            ) from e
        applied.append(key)

    LOGGER.debug(f"Applied {len(applied)} secret keys to environment: {', '.join(applied)}")
    return applied
