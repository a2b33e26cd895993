"""
Unit tests for the shared message envelope.
"""

import io

import pytest

from httpmodel.errors import ValidationError
from httpmodel.http.headers import HeaderCollection
from httpmodel.http.message import Body, Message


class TestMessage:
    """Tests for Message."""

    def test_defaults(self):
        """Test defaults."""
        message = Message()

        assert message.protocol_version == "1.1"
        assert message.headers == {}
        assert message.body is None

    def test_initial_headers_from_dict(self):
        """Test initial headers from dict."""
        message = Message(headers={"Accept": ["text/html", "text/plain"]})

        assert message.get_header("accept") == "text/html,text/plain"
        assert message.get_header_lines("ACCEPT") == ["text/html", "text/plain"]

    def test_initial_header_collection_is_copied(self):
        """Test that the initial HeaderCollection is copied."""
        headers = HeaderCollection({"X-One": "1"})
        message = Message(headers=headers)
        headers.set("X-One", "changed")

        assert message.get_header("X-One") == "1"

    def test_with_header_leaves_original(self):
        """Test copy-on-transform for headers."""
        original = Message()
        changed = original.with_header("X-Test", ["a", "b"])

        assert not original.has_header("X-Test")
        assert changed.get_header("x-test") == "a,b"
        assert changed.headers == {"X-Test": ["a", "b"]}

    def test_with_added_header(self):
        """Test with added header."""
        message = (Message()
            .with_added_header("Accept", "text/html")
            .with_added_header("accept", "application/json"))

        assert message.get_header_lines("Accept") == ["text/html", "application/json"]

    def test_without_header(self):
        """Test without header."""
        message = Message(headers={"X-One": "1"})
        removed = message.without_header("x-one")

        assert removed.get_header("X-One") is None
        assert message.get_header("X-One") == "1"

    def test_invalid_header_leaves_message_unchanged(self):
        """Test invalid header leaves message unchanged."""
        message = Message(headers={"X-One": "1"})

        with pytest.raises(ValidationError):
            message.with_header("X-One", 2)

        assert message.get_header_lines("X-One") == ["1"]

    def test_headers_property_is_a_copy(self):
        """Test headers property is a copy."""
        message = Message(headers={"X-One": "1"})
        message.headers["X-One"].append("2")

        assert message.get_header_lines("X-One") == ["1"]

    def test_with_protocol_version(self):
        """Test with protocol version."""
        message = Message()
        updated = message.with_protocol_version("1.0")

        assert updated.protocol_version == "1.0"
        assert message.protocol_version == "1.1"
        assert Message().with_protocol_version("2").protocol_version == "2"

    @pytest.mark.parametrize("version", ["HTTP/1.1", "1.1.1", "", 1.1])
    def test_invalid_protocol_version(self, version):
        """Test invalid protocol version."""
        with pytest.raises(ValidationError):
            Message().with_protocol_version(version)

    def test_with_body(self, body: io.BytesIO):
        """Test with body."""
        message = Message()
        updated = message.with_body(body)

        assert updated.body is body
        assert message.body is None
        assert isinstance(updated.body, Body)

    @pytest.mark.parametrize("bad_body", ["text", b"bytes", {"read": 1}])
    def test_invalid_body(self, bad_body):
        """Test invalid body."""
        with pytest.raises(ValidationError) as exc_info:
            Message().with_body(bad_body)

        assert exc_info.value.field == "body"

    def test_body_not_copied_between_instances(self, body: io.BytesIO):
        """Test that the body handle is shared, not duplicated, on transform."""
        message = Message(body=body).with_header("X-One", "1")

        assert message.body is body
