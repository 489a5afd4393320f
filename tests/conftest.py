"""Pytest configuration and fixtures for cloudwrap-lib tests."""

import os
from collections.abc import Generator

import boto3
import pytest
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from cloudwrap_lib.cal.ioc import reset_cloud_container

# Start one with: docker run -d --rm -p 4566:4566 localstack/localstack
LOCALSTACK_URL = os.environ.get("CLOUDWRAP_TEST_LOCALSTACK_URL", "http://localhost:4566")


def is_localstack_reachable(endpoint_url: str) -> bool:
    """Check whether an SQS call against ``endpoint_url`` answers within a second."""
    client = boto3.client(
        "sqs",
        region_name="us-east-1",
        endpoint_url=endpoint_url,
        aws_access_key_id="test",
        aws_secret_access_key="test",
        config=Config(connect_timeout=1, read_timeout=1, retries={"total_max_attempts": 1}),
    )
    try:
        client.list_queues()
    except (BotoCoreError, ClientError):
        return False
    finally:
        client.close()
    return True


@pytest.fixture(autouse=True)
def _clean_global_container() -> Generator[None, None, None]:
    """Make sure no test leaks the global IoC container into the next."""
    reset_cloud_container()
    yield
    reset_cloud_container()


@pytest.fixture(scope="session")
def localstack() -> str:
    """Endpoint of a running LocalStack; integration tests skip without one."""
    if not is_localstack_reachable(LOCALSTACK_URL):
        pytest.skip(f"LocalStack not reachable at {LOCALSTACK_URL} - skipping integration tests")
    return LOCALSTACK_URL
