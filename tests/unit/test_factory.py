"""
Unit tests for MessageFactory.
"""

import pytest

from httpmodel.config import MessageConfig
from httpmodel.errors import ValidationError
from httpmodel.factory import MessageFactory
from httpmodel.http import Request, Response, ServerRequest, Uri


class TestMessageFactory:
    """Tests for MessageFactory."""

    def test_default_config(self):
        """Test default config."""
        factory = MessageFactory()

        assert factory.config == MessageConfig()
        assert factory.create_request("GET").protocol_version == "1.1"

    def test_invalid_config_rejected(self):
        """Test that invalid config is rejected."""
        with pytest.raises(ValueError):
            MessageFactory(MessageConfig(protocol_version="one"))

    def test_protocol_version_applied(self):
        """Test that protocol version is applied."""
        factory = MessageFactory(MessageConfig(protocol_version="1.0"))

        request = factory.create_request("GET", "https://example.com/")
        response = factory.create_response(404)
        server_request = factory.create_server_request("GET", "/")

        assert request.protocol_version == "1.0"
        assert response.protocol_version == "1.0"
        assert server_request.protocol_version == "1.0"
        assert response.status_line == "HTTP/1.0 404 Not Found"

    def test_create_uri_uses_scheme_ports(self):
        """Test create uri uses scheme ports."""
        factory = MessageFactory(MessageConfig(scheme_ports={"wss": 443}))

        assert factory.create_uri("wss://chat.example.com:443/").port is None
        assert Uri("wss://chat.example.com:443/").port == 443

    def test_create_request(self):
        """Test create request."""
        request = MessageFactory().create_request("post", "http://example.com/items")

        assert isinstance(request, Request)
        assert request.method == "POST"
        assert request.uri.path == "/items"
        assert request.get_header("Host") == "example.com"

    def test_create_request_with_uri_object(self):
        """Test create request with uri object."""
        uri = Uri("http://example.com/")

        assert MessageFactory().create_request("GET", uri).uri is uri

    def test_create_response(self):
        """Test create response."""
        response = MessageFactory().create_response()

        assert isinstance(response, Response)
        assert response.status_code == 200
        assert response.reason_phrase == "OK"
        assert MessageFactory().create_response(404, "Gone Fishing").reason_phrase == "Gone Fishing"


class TestCreateServerRequest:
    """Tests for server request derivation."""

    def test_query_params_from_uri(self):
        """Test query params from uri."""
        request = MessageFactory().create_server_request(
            "GET", "http://example.com/search?a=1&a=2&b="
        )

        assert isinstance(request, ServerRequest)
        assert request.query_params == {"a": ["1", "2"], "b": [""]}

    def test_no_uri(self):
        """Test no uri."""
        request = MessageFactory().create_server_request("GET")

        assert request.uri is None
        assert request.query_params == {}
        assert request.cookie_params == {}

    def test_cookies_from_server_params(self):
        """Test cookies from server params."""
        request = MessageFactory().create_server_request(
            "GET",
            "http://example.com/",
            server_params={"HTTP_COOKIE": "sid=abc; theme=dark", "REMOTE_ADDR": "10.0.0.1"},
        )

        assert request.cookie_params == {"sid": "abc", "theme": "dark"}
        assert request.server_params["REMOTE_ADDR"] == "10.0.0.1"

    def test_repeated_cookie_keeps_first_value(self):
        """Test that a cookie sent twice keeps the value sent first."""
        request = MessageFactory().create_server_request(
            "GET", "/", server_params={"HTTP_COOKIE": "a=1; b=2; a=3"}
        )

        assert request.cookie_params == {"a": "1", "b": "2"}

    def test_non_string_cookie_header(self):
        """Test non string cookie header."""
        with pytest.raises(ValidationError) as exc_info:
            MessageFactory().create_server_request(
                "GET", "/", server_params={"HTTP_COOKIE": ["sid=abc"]}
            )

        assert exc_info.value.field == "cookie_params"
