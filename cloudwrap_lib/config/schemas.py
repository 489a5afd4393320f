"""
Configuration schema for the cloud client.

This module defines the Pydantic model describing how the client talks to AWS:
- Region and optional named profile for the boto3 session
- Optional endpoint override (LocalStack)
- Per-call timeout applied to every service client
- Secrets Manager version stage used when none is given per call
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REGION = "us-east-1"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_VERSION_STAGE = "AWSCURRENT"


class CloudClientConfig(BaseModel):
    """
    Cloud client configuration (cloudwrap.yaml or CLOUDWRAP_* variables).

    Examples
    --------
        AWS:
            region: us-east-1
            profile_name: production
            timeout_seconds: 10

        LocalStack:
            region: us-east-1
            endpoint_url: "http://localhost:4566"
            verify_ssl: false

    """

    region: Annotated[str, Field(default=DEFAULT_REGION, description="AWS region, fixed for the client lifetime")]
    profile_name: Annotated[
        str | None,
        Field(default=None, description="Named profile from the shared AWS config. None means the default chain"),
    ]
    endpoint_url: Annotated[
        str | None,
        Field(default=None, description="Endpoint override for every service (e.g. LocalStack). None means AWS"),
    ]
    timeout_seconds: Annotated[
        float,
        Field(default=DEFAULT_TIMEOUT_SECONDS, description="Connect and read timeout for each outbound call"),
    ]
    version_stage: Annotated[
        str,
        Field(default=DEFAULT_VERSION_STAGE, description="Secrets Manager version stage used by default"),
    ]
    verify_ssl: Annotated[bool, Field(default=True, description="Verify SSL certificates")]

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("region", "version_stage")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only values."""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Timeouts must be strictly positive."""
        if v <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {v}")
        return v
