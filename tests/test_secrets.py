"""Tests for secret payload decoding and environment injection."""

import base64
import json
import os
from collections import UserDict

import pytest

from cloudwrap_lib.exceptions import EnvironmentInjectionError, SecretDecodeError
from cloudwrap_lib.secrets import apply_bundle_to_environment, decode_secret_payload


def _binary(payload: dict) -> bytes:
    return base64.b64encode(json.dumps(payload).encode("utf-8"))


class FailingEnviron(UserDict):
    """Environment mapping that refuses one key."""

    def __init__(self, bad_key: str):
        super().__init__()
        self.bad_key = bad_key

    def __setitem__(self, key, value):
        if key == self.bad_key:
            raise ValueError(f"illegal environment variable name: {key}")
        super().__setitem__(key, value)


class TestDecodeSecretPayload:
    """Test decoding of get_secret_value responses."""

    def test_string_payload(self):
        """JSON string payload decodes to exactly its entries."""
        bundle = decode_secret_payload("app", {"SecretString": '{"A":"1","B":"2"}'})

        assert bundle == {"A": "1", "B": "2"}

    def test_binary_payload(self):
        """Base64 binary payload is decoded then parsed."""
        bundle = decode_secret_payload("app", {"SecretBinary": _binary({"X": "y"})})

        assert bundle == {"X": "y"}

    def test_line_wrapped_binary_payload(self):
        """Base64 wrapped every 76 characters decodes like the unwrapped form."""
        payload = {f"KEY_{i:03d}": "v" * 20 for i in range(100)}
        wrapped = base64.encodebytes(json.dumps(payload).encode("utf-8"))
        assert b"\n" in wrapped.rstrip(b"\n")

        assert decode_secret_payload("app", {"SecretBinary": wrapped}) == payload

    def test_crlf_wrapped_binary_payload(self):
        wrapped = base64.encodebytes(b'{"X":"y"}').replace(b"\n", b"\r\n")

        assert decode_secret_payload("app", {"SecretBinary": wrapped}) == {"X": "y"}

    def test_string_payload_wins_when_both_present(self):
        response = {"SecretString": '{"from": "string"}', "SecretBinary": _binary({"from": "binary"})}

        assert decode_secret_payload("app", response) == {"from": "string"}

    def test_empty_object(self):
        assert decode_secret_payload("app", {"SecretString": "{}"}) == {}

    def test_missing_payload_raises(self):
        with pytest.raises(SecretDecodeError, match="neither SecretString nor SecretBinary"):
            decode_secret_payload("app", {"Name": "app"})

    def test_invalid_base64_raises(self):
        """Base64 errors are raised, never swallowed."""
        with pytest.raises(SecretDecodeError, match="not valid base64"):
            decode_secret_payload("app", {"SecretBinary": b"***not base64***"})

    def test_binary_not_utf8_raises(self):
        with pytest.raises(SecretDecodeError, match="not UTF-8"):
            decode_secret_payload("app", {"SecretBinary": base64.b64encode(b"\xff\xfe\xfd")})

    def test_invalid_json_string_raises(self):
        with pytest.raises(SecretDecodeError, match="not valid JSON"):
            decode_secret_payload("app", {"SecretString": "plain-password"})

    def test_invalid_json_in_binary_raises(self):
        with pytest.raises(SecretDecodeError, match="not valid JSON"):
            decode_secret_payload("app", {"SecretBinary": base64.b64encode(b"{broken")})

    @pytest.mark.parametrize("payload", ['["a", "b"]', '"just a string"', "42", "null"])
    def test_non_object_json_raises(self, payload):
        with pytest.raises(SecretDecodeError, match="must be a JSON object"):
            decode_secret_payload("app", {"SecretString": payload})

    def test_non_string_values_raise(self):
        with pytest.raises(SecretDecodeError, match="PORT"):
            decode_secret_payload("app", {"SecretString": '{"HOST": "db", "PORT": 5432}'})

    def test_error_names_secret(self):
        with pytest.raises(SecretDecodeError, match="'prod/db'"):
            decode_secret_payload("prod/db", {"SecretString": "not json"})


class TestApplyBundleToEnvironment:
    """Test writing bundles into an environment mapping."""

    def test_sets_every_key(self):
        environ: dict[str, str] = {}

        applied = apply_bundle_to_environment({"A": "1", "B": "2"}, environ)

        assert environ == {"A": "1", "B": "2"}
        assert applied == ["A", "B"]

    def test_overwrites_existing_values(self):
        environ = {"A": "old"}

        apply_bundle_to_environment({"A": "new"}, environ)

        assert environ["A"] == "new"

    def test_stops_on_first_failure_without_rollback(self):
        """If the third of five keys fails, the first two stay set."""
        bundle = {"K1": "1", "K2": "2", "K3": "3", "K4": "4", "K5": "5"}
        environ = FailingEnviron(bad_key="K3")

        with pytest.raises(EnvironmentInjectionError) as exc_info:
            apply_bundle_to_environment(bundle, environ)

        assert dict(environ) == {"K1": "1", "K2": "2"}
        assert exc_info.value.key == "K3"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_defaults_to_os_environ(self, monkeypatch):
        monkeypatch.delenv("CLOUDWRAP_TEST_SECRET", raising=False)

        apply_bundle_to_environment({"CLOUDWRAP_TEST_SECRET": "s3cr3t"})

        assert os.environ["CLOUDWRAP_TEST_SECRET"] == "s3cr3t"
        monkeypatch.delenv("CLOUDWRAP_TEST_SECRET")

    def test_os_environ_rejects_null_bytes(self, monkeypatch):
        """Real os.environ failures surface as EnvironmentInjectionError."""
        monkeypatch.setenv("CLOUDWRAP_OK", "placeholder")

        with pytest.raises(EnvironmentInjectionError):
            apply_bundle_to_environment({"CLOUDWRAP_OK": "fine", "CLOUDWRAP_BAD": "nul\x00byte"}, os.environ)

        assert os.environ["CLOUDWRAP_OK"] == "fine"
