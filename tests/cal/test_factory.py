"""Tests for the cloud client factory."""

from unittest.mock import MagicMock, patch

import pytest

from cloudwrap_lib.cal import CloudClientProtocol, create_cloud_client
from cloudwrap_lib.config.schemas import CloudClientConfig
from cloudwrap_lib.exceptions import CloudWrapConfigurationError


@pytest.fixture
def mock_session_cls():
    """Patch boto3.Session with a session that has credentials."""
    with patch("cloudwrap_lib.cal.adapters.aws.boto3.Session") as session_cls:
        session_cls.return_value.get_credentials.return_value = MagicMock()
        session_cls.return_value.region_name = "us-east-1"
        yield session_cls


@pytest.fixture(autouse=True)
def _no_cloudwrap_env(monkeypatch):
    for var in ("CLOUDWRAP_REGION", "CLOUDWRAP_PROFILE", "CLOUDWRAP_ENDPOINT_URL", "CLOUDWRAP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(var, raising=False)


class TestCreateCloudClient:
    """Test create_cloud_client."""

    def test_default_region(self, mock_session_cls):
        client = create_cloud_client()

        assert isinstance(client, CloudClientProtocol)
        mock_session_cls.assert_called_once_with(region_name="us-east-1")

    def test_explicit_region(self, mock_session_cls):
        create_cloud_client(region="eu-west-1")

        mock_session_cls.assert_called_once_with(region_name="eu-west-1")

    def test_region_from_environment(self, mock_session_cls, monkeypatch):
        monkeypatch.setenv("CLOUDWRAP_REGION", "ap-southeast-2")

        create_cloud_client()

        mock_session_cls.assert_called_once_with(region_name="ap-southeast-2")

    def test_explicit_config_with_region_override(self, mock_session_cls):
        cfg = CloudClientConfig(region="us-west-2", profile_name="ops")

        create_cloud_client(region="ca-central-1", config=cfg)

        mock_session_cls.assert_called_once_with(region_name="ca-central-1", profile_name="ops")

    def test_config_file(self, mock_session_cls, tmp_path):
        path = tmp_path / "cloudwrap.yaml"
        path.write_text("cloudwrap:\n  region: sa-east-1\n  endpoint_url: http://localhost:4566\n")

        create_cloud_client(config_path=path)

        mock_session_cls.assert_called_once_with(region_name="sa-east-1")

    def test_endpoint_override_reaches_service_clients(self, mock_session_cls):
        session = mock_session_cls.return_value
        session.client.return_value.send_message.return_value = {"MessageId": "m-1"}

        client = create_cloud_client(endpoint_url="http://localhost:4566")
        client.enqueue_message("body", "queue-url")

        assert session.client.call_args.kwargs["endpoint_url"] == "http://localhost:4566"

    def test_missing_credentials_is_fatal(self, mock_session_cls):
        mock_session_cls.return_value.get_credentials.return_value = None

        with pytest.raises(CloudWrapConfigurationError):
            create_cloud_client()

    def test_invalid_config_is_fatal(self):
        with pytest.raises(CloudWrapConfigurationError):
            create_cloud_client(timeout_seconds=0)
