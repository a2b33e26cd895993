"""
=============================================================================
HTTP MESSAGE ENVELOPE
=============================================================================

The part every HTTP message shares: protocol version, headers and body.
Request and Response build on top of Message.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                            Message                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │   protocol_version   "1.1"                                          │
    │   headers            HeaderCollection (case-insensitive, multi)    │
    │   body               opaque stream handle (read()/write())         │
    └───────────────┬──────────────────────────────┬──────────────────────┘
                    │                              │
               ┌────┴────┐                    ┌────┴─────┐
               │ Request │                    │ Response │
               └────┬────┘                    └──────────┘
                    │
             ┌──────┴────────┐
             │ ServerRequest │
             └───────────────┘

=============================================================================
TRANSFORM, DON'T MUTATE
=============================================================================

Every with_* method returns a NEW message and leaves the receiver as it
was. Chaining reads naturally and a half-built message can be shared
without one caller's changes leaking into another's:

    base = Request("GET", "https://api.example.com/users")
    authed = base.with_header("Authorization", "Bearer abc")

    base.has_header("Authorization")      # False
    authed.has_header("Authorization")    # True

Validation happens BEFORE the copy is made, so a failing call raises and
nothing at all changes.

=============================================================================
THE BODY COLLABORATOR
=============================================================================

The body is never interpreted here. Anything with callable read() and
write() is accepted (io.BytesIO, a spooled temp file, a socket adaptor).
Getting and replacing it is all this module does.

=============================================================================
"""

import copy
import logging
import re
from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

from ..errors import ValidationError
from .headers import HeaderCollection, HeaderValue


logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"^\d(\.\d)?$")

HeadersInit = Union[HeaderCollection, Dict[str, HeaderValue], None]


@runtime_checkable
class Body(Protocol):
    """Readable/writable stream handle carried as the message body."""

    def read(self, *args: Any) -> Any: ...

    def write(self, data: Any) -> Any: ...


class Message:
    """
    Protocol version, headers and body, with copy-on-transform semantics.

    Args:
        headers: A HeaderCollection (copied) or a dict of name → value(s).
        body: Stream handle with read()/write(), or None.
        protocol_version: Version number only, e.g. "1.1" or "2".
    """

    def __init__(
        self,
        headers: HeadersInit = None,
        body: Optional[Body] = None,
        protocol_version: str = "1.1",
    ):
        if isinstance(headers, HeaderCollection):
            self._headers = headers.copy()
        else:
            self._headers = HeaderCollection(headers)
        self._body = _validate_body(body) if body is not None else None
        self._protocol_version = _validate_version(protocol_version)

    # =========================================================================
    # PROTOCOL VERSION
    # =========================================================================

    @property
    def protocol_version(self) -> str:
        return self._protocol_version

    def with_protocol_version(self, version: str):
        """New message with ``version`` ("1.0", "1.1", "2", ...)."""
        return self._copy_with(protocol_version=_validate_version(version))

    # =========================================================================
    # HEADERS
    # =========================================================================
    #
    # Reads go through _header_store() so subclasses can add derived headers
    # (Request synthesizes Host) without overriding every accessor.
    #

    def _header_store(self) -> HeaderCollection:
        return self._headers

    @property
    def headers(self) -> Dict[str, List[str]]:
        """All headers as {emission name: [values]} (a copy)."""
        return self._header_store().to_dict()

    def has_header(self, name: str) -> bool:
        return self._header_store().has(name)

    def get_header(self, name: str) -> Optional[str]:
        """Comma-joined values, or None if the header is absent."""
        return self._header_store().get_joined(name)

    def get_header_lines(self, name: str) -> List[str]:
        """Every value of the header, [] if absent."""
        return self._header_store().get_lines(name)

    def with_header(self, name: str, value: HeaderValue):
        """New message where ``name`` holds exactly ``value``."""
        headers = self._headers.copy()
        headers.set(name, value)
        return self._copy_with(headers=headers)

    def with_added_header(self, name: str, value: HeaderValue):
        """New message with ``value`` appended to any existing ``name`` values."""
        headers = self._headers.copy()
        headers.append(name, value)
        return self._copy_with(headers=headers)

    def without_header(self, name: str):
        headers = self._headers.copy()
        headers.remove(name)
        return self._copy_with(headers=headers)

    # =========================================================================
    # BODY
    # =========================================================================

    @property
    def body(self) -> Optional[Body]:
        return self._body

    def with_body(self, body: Body):
        """New message carrying ``body``; it must offer read() and write()."""
        return self._copy_with(body=_validate_body(body))

    # =========================================================================
    # COPYING
    # =========================================================================

    def _clone(self):
        """
        Shallow copy with its own header store.

        Subclasses holding other mutable state extend this. The body handle
        is shared between copies.
        """
        dup = copy.copy(self)
        dup._headers = self._headers.copy()
        return dup

    def _copy_with(self, **fields: Any):
        dup = self._clone()
        for name, value in fields.items():
            setattr(dup, f"_{name}", value)
        return dup


def _validate_version(version: str) -> str:
    if not isinstance(version, str) or not VERSION_PATTERN.match(version):
        logger.debug(f"Rejected protocol version {version!r}")
        raise ValidationError(
            f"Invalid protocol version: {version!r}", field="protocol_version"
        )
    return version


def _validate_body(body: Body) -> Body:
    if not isinstance(body, Body) or not (callable(body.read) and callable(body.write)):
        raise ValidationError(
            "Body must be a stream with read() and write()", field="body"
        )
    return body
