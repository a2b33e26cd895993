"""
Unit tests for server-side requests.
"""

from dataclasses import dataclass

import pytest

from httpmodel.errors import ValidationError
from httpmodel.http.server_request import AttributeBag, ServerRequest


@dataclass
class LoginForm:
    username: str
    password: str


class TestServerRequestParams:
    """Tests for environment, cookie, query and file params."""

    def test_constructor_params(self, server_request: ServerRequest):
        """Test constructor params."""
        assert server_request.method == "POST"
        assert server_request.server_params["REMOTE_ADDR"] == "127.0.0.1"
        assert server_request.cookie_params == {"sid": "abc"}
        assert server_request.query_params == {"page": "2"}
        assert server_request.file_params["avatar"]["name"] == "me.png"

    def test_defaults_are_empty(self):
        """Test defaults are empty."""
        request = ServerRequest()

        assert dict(request.server_params) == {}
        assert request.cookie_params == {}
        assert request.query_params == {}
        assert dict(request.file_params) == {}
        assert request.parsed_body is None
        assert len(request.attributes) == 0

    def test_server_params_read_only(self, server_request: ServerRequest):
        """Test server params read only."""
        with pytest.raises(TypeError):
            server_request.server_params["REMOTE_ADDR"] = "10.0.0.1"

    def test_file_params_read_only(self, server_request: ServerRequest):
        """Test file params read only."""
        with pytest.raises(TypeError):
            server_request.file_params["other"] = {}

    def test_server_params_snapshot(self):
        """Test that later changes to the source mapping aren't seen."""
        environ = {"SERVER_NAME": "example.com"}
        request = ServerRequest(server_params=environ)
        environ["SERVER_NAME"] = "changed"

        assert request.server_params["SERVER_NAME"] == "example.com"

    def test_with_cookie_params(self, server_request: ServerRequest):
        """Test with cookie params."""
        updated = server_request.with_cookie_params({"theme": "dark"})

        assert updated.cookie_params == {"theme": "dark"}
        assert server_request.cookie_params == {"sid": "abc"}

    def test_with_query_params(self, server_request: ServerRequest):
        """Test with query params."""
        updated = server_request.with_query_params({"page": "3"})

        assert updated.query_params == {"page": "3"}
        assert server_request.query_params == {"page": "2"}
        # The URI is untouched
        assert updated.uri.query == "page=2"

    @pytest.mark.parametrize("value", [["a"], "sid=abc", 42])
    def test_params_must_be_mappings(self, value):
        """Test params must be mappings."""
        with pytest.raises(ValidationError):
            ServerRequest().with_cookie_params(value)
        with pytest.raises(ValidationError):
            ServerRequest().with_query_params(value)

    def test_constructor_rejects_non_mapping(self):
        """Test constructor rejects non mapping."""
        with pytest.raises(ValidationError) as exc_info:
            ServerRequest(server_params=[("A", "1")])

        assert exc_info.value.field == "server_params"


class TestParsedBody:
    """Tests for the parsed body."""

    @pytest.mark.parametrize("data", [
        {"name": "John"},
        [1, 2, 3],
        (1, 2),
        LoginForm("john", "secret"),
        None,
    ])
    def test_structured_values_accepted(self, data):
        """Test that structured values are accepted."""
        request = ServerRequest().with_parsed_body(data)

        assert request.parsed_body == data

    @pytest.mark.parametrize("data", ["name=John", b"{}", 42, 1.5, True])
    def test_scalars_rejected(self, data):
        """Test that scalars are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            ServerRequest().with_parsed_body(data)

        assert exc_info.value.field == "parsed_body"

    def test_with_parsed_body_leaves_original(self):
        """Test that with_parsed_body leaves the original unchanged."""
        original = ServerRequest(parsed_body={"a": 1})
        original.with_parsed_body(None)

        assert original.parsed_body == {"a": 1}


class TestAttributes:
    """Tests for the attribute bag."""

    def test_get_with_default(self):
        """Test get with default."""
        request = ServerRequest()

        assert request.get_attribute("missing") is None
        assert request.get_attribute("missing", "n/a") == "n/a"

    def test_with_attribute_mutates_in_place(self):
        """Test with attribute mutates in place."""
        request = ServerRequest()
        returned = request.with_attribute("user_id", 42)

        assert returned is request
        assert request.get_attribute("user_id") == 42
        assert request.attributes["user_id"] == 42

    def test_without_attribute(self):
        """Test without attribute."""
        request = ServerRequest().with_attribute("a", 1).with_attribute("b", 2)
        request.without_attribute("a")
        request.without_attribute("never-set")

        assert dict(request.attributes) == {"b": 2}

    def test_falsy_attribute_values_kept(self):
        """Test that falsy attribute values are kept."""
        request = ServerRequest().with_attribute("flag", False)

        assert request.get_attribute("flag", True) is False

    def test_copies_do_not_share_attributes(self):
        """Test that other with_* copies get their own bag."""
        request = ServerRequest().with_attribute("route", "users.show")
        copy = request.with_method("DELETE")
        copy.with_attribute("id", "7")

        assert copy.get_attribute("route") == "users.show"
        assert request.get_attribute("id") is None

    def test_attribute_names_must_be_strings(self):
        """Test attribute names must be strings."""
        with pytest.raises(ValidationError):
            ServerRequest().with_attribute(1, "x")

    def test_bag_is_a_mapping(self):
        """Test bag is a mapping."""
        bag = AttributeBag({"a": 1})
        bag["b"] = 2
        del bag["a"]

        assert dict(bag) == {"b": 2}
        assert bag.copy() == {"b": 2}


class TestServerRequestInheritance:
    """Tests that Request behavior carries over."""

    def test_host_synthesized(self, server_request: ServerRequest):
        """Test host synthesized."""
        assert server_request.get_header("Host") == "example.com"

    def test_request_target(self, server_request: ServerRequest):
        """Test request target."""
        assert server_request.request_target == "/users?page=2"

    def test_with_header_returns_server_request(self, server_request: ServerRequest):
        """Test with header returns server request."""
        updated = server_request.with_header("Accept", "application/json")

        assert isinstance(updated, ServerRequest)
        assert updated.cookie_params == {"sid": "abc"}
        assert not server_request.has_header("Accept")
