"""Tests for wasp.cli.platform.types."""

import pytest
from pydantic import ValidationError

from wasp.cli.platform.types import (
    ClientContext,
    CompileResponse,
    HostCreatePayload,
    HostUpdatePayload,
    LoginResponse,
)


class TestClientContext:
    """Tests for ClientContext."""

    def test_defaults(self):
        context = ClientContext(api_url="https://api.example-platform.test")
        assert context.account == "default"

    def test_frozen(self):
        context = ClientContext()
        with pytest.raises(ValidationError):
            context.account = "other"


class TestPayloads:
    """Tests for host payload serialization."""

    def test_update_omits_absent_fields(self):
        assert HostUpdatePayload().to_wire() == {}

    def test_update_keeps_null_env_values(self):
        payload = HostUpdatePayload(module="m_1", env={"A": None, "B": "x"})
        assert payload.to_wire() == {"module": "m_1", "env": {"A": None, "B": "x"}}

    def test_create_always_has_host_and_customer(self):
        payload = HostCreatePayload(host="h", customer_id="c", function="run")
        assert payload.to_wire() == {"host": "h", "customer_id": "c", "function": "run"}


class TestResponses:
    """Tests for API response models."""

    def test_compile_response_alias(self):
        assert CompileResponse.model_validate_json('{"ok": "m_42"}').module_id == "m_42"

    def test_compile_response_requires_ok(self):
        with pytest.raises(ValidationError):
            CompileResponse.model_validate_json('{"error": "x"}')

    def test_login_response(self):
        login = LoginResponse.model_validate_json('{"access_token": "t", "expires_in": 60}')
        assert login.access_token == "t"
        assert login.expires_in == 60

    def test_login_response_negative_ttl(self):
        with pytest.raises(ValidationError):
            LoginResponse(access_token="t", expires_in=-1)

    def test_login_response_ttl_too_large(self):
        with pytest.raises(ValidationError):
            LoginResponse(access_token="t", expires_in=10**12)
