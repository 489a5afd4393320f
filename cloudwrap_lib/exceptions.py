"""
CloudWrap exception classes.

This module defines custom exceptions for CloudWrap so that failures raised by the
wrapper itself can be told apart from the boto3/botocore errors it lets through.

Provider and network failures (``ClientError``, ``BotoCoreError``, timeouts) are
never wrapped: they reach the caller unchanged.
"""


class CloudWrapError(Exception):
    """
    Base exception for all CloudWrap errors.

    All CloudWrap exceptions inherit from this, allowing users to catch all
    wrapper-specific errors with a single except clause while not catching
    unrelated Python or provider errors.
    """

    pass


class CloudWrapConfigurationError(CloudWrapError):
    """
    Raised when the client configuration is invalid or incomplete.

    This includes malformed config files, invalid environment overrides and a
    session that cannot resolve any credentials at construction time.
    """

    pass


class SecretDecodeError(CloudWrapError):
    """
    Raised when a secret payload cannot be decoded into a secret bundle.

    Example:
    -------
        A binary secret that is not valid base64:
        >>> client.fetch_secret_bundle("broken-binary-secret")
        SecretDecodeError: Secret 'broken-binary-secret' binary payload is not valid base64...

    """

    pass


class QueueResolutionError(CloudWrapError):
    """Raised when a queue lookup succeeds but returns no queue URL."""

    pass


class MessageNotSentError(CloudWrapError):
    """
    Raised when the queue accepted a send request but returned no message id.

    The original payload is kept on the exception so callers can resend or log it.
    """

    def __init__(self, message: str, payload: str):
        super().__init__(message)
        self.payload = payload


class EnvironmentInjectionError(CloudWrapError):
    """
    Raised when a secret bundle entry cannot be written to the environment.

    Keys written before the failing one stay set. The underlying error is chained
    as ``__cause__``.
    """

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key
