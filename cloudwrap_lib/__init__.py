"""
CloudWrap Library - thin client for AWS secrets, queues and object storage.

This library provides:
- Cloud Abstraction Layer (CAL): capability protocols plus a boto3 adapter
- Secret bundle decoding (JSON or base64 JSON) and environment injection
- Configuration from YAML files and CLOUDWRAP_* environment variables
- IoC container wiring session, service clients and adapters
"""

from cloudwrap_lib.exceptions import (
    CloudWrapConfigurationError,
    CloudWrapError,
    EnvironmentInjectionError,
    MessageNotSentError,
    QueueResolutionError,
    SecretDecodeError,
)

try:
    from cloudwrap_lib._version import __version__
except ImportError:
    __version__ = "0.0.0.dev0"

__all__ = [
    # Exceptions
    "CloudWrapError",
    "CloudWrapConfigurationError",
    "SecretDecodeError",
    "QueueResolutionError",
    "MessageNotSentError",
    "EnvironmentInjectionError",
    # Version
    "__version__",
]
