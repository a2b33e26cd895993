"""
=============================================================================
HTTP REQUEST
=============================================================================

A request message: method, URI and request-target layered on Message.

=============================================================================
REQUEST LINE ANATOMY
=============================================================================

    GET /api/users?page=1 HTTP/1.1
    ─┬─ ────────┬──────── ────┬───
     │          │             │
   method  request-target  protocol_version ("1.1")

The request-target is usually DERIVED from the URI (origin-form). It can
be overridden for the three other forms RFC 7230 allows:

    ┌────────────────┬──────────────────────────────┬─────────────────────┐
    │  Form          │  Example                     │  Used for           │
    ├────────────────┼──────────────────────────────┼─────────────────────┤
    │  origin-form   │  /api/users?page=1           │  normal requests    │
    │  absolute-form │  http://example.com/api      │  requests to proxy  │
    │  authority-form│  example.com:443             │  CONNECT            │
    │  asterisk-form │  *                           │  OPTIONS * (server) │
    └────────────────┴──────────────────────────────┴─────────────────────┘

=============================================================================
THE HOST HEADER
=============================================================================

HTTP/1.1 requires a Host header. If the application never set one but the
request has a URI with a host, the header is SYNTHESIZED on read:

    request = Request("GET", "https://example.com/users")
    request.get_header("Host")     # "example.com"   (from the URI)

    request = request.with_header("Host", "other.com")
    request.get_header("Host")     # "other.com"     (explicit always wins)

Synthesis happens lazily, on a copy of the header store, every time headers
are read. Nothing is written back, so a later with_uri() is reflected.

=============================================================================
INTERVIEW QUESTIONS ABOUT REQUESTS
=============================================================================

Q: "Why normalize the method to upper-case if methods are case-sensitive?"
A: "RFC 7231 says methods are case-sensitive, and every standard one is
   upper-case. Accepting 'get' and storing 'GET' catches a common caller
   mistake without ever storing a method the server wouldn't recognise."

Q: "When would a request-target not be derived from the URI?"
A: "Talking to a forward proxy (absolute-form), opening a tunnel with
   CONNECT (authority-form) and server-wide OPTIONS (asterisk-form)."

=============================================================================
"""

import logging
import re
from typing import Optional, Union
from urllib.parse import urlsplit

from ..errors import ValidationError
from .headers import HeaderCollection
from .message import Body, HeadersInit, Message
from .uri import Uri, format_host


logger = logging.getLogger(__name__)


# =============================================================================
# VALID HTTP METHODS
# =============================================================================
#
# Closed set: RFC 7231 methods plus PATCH (RFC 5789). Anything else is
# rejected by with_method().
#
VALID_METHODS = frozenset({
    "OPTIONS",  # Get allowed methods (CORS preflight)
    "GET",      # Retrieve resource
    "HEAD",     # GET without body
    "POST",     # Create resource / submit data
    "PUT",      # Replace resource
    "DELETE",   # Delete resource
    "TRACE",    # Echo request (debugging)
    "CONNECT",  # Establish tunnel (HTTPS proxy)
    "PATCH",    # Partial update
})

ORIGIN_FORM_PATTERN = re.compile(r"^/[^\s#]*$")
AUTHORITY_FORM_PATTERN = re.compile(
    r"^(?:\[[0-9A-Fa-f:.]+\]|[A-Za-z0-9\-._~%!$&'()*+,;=]+):\d{1,5}$"
)

UriInit = Union[Uri, str, None]


class Request(Message):
    """
    An HTTP request.

    Args:
        method: HTTP method, any case ("get" is stored as "GET").
        uri: A Uri, a URI string, or None.
        headers: Initial headers (see Message).
        body: Stream handle with read()/write().
        protocol_version: "1.1" by default.

    Example:
        request = (Request("POST", "https://api.example.com/users?notify=1")
            .with_header("Content-Type", "application/json")
            .with_body(io.BytesIO(b'{"name": "alice"}')))

        request.request_target        # "/users?notify=1"
        request.get_header("host")    # "api.example.com"
    """

    def __init__(
        self,
        method: str = "GET",
        uri: UriInit = None,
        headers: HeadersInit = None,
        body: Optional[Body] = None,
        protocol_version: str = "1.1",
    ):
        super().__init__(headers=headers, body=body, protocol_version=protocol_version)
        self._method = _validate_method(method)
        self._uri = _coerce_uri(uri)
        self._request_target: Optional[str] = None

    # =========================================================================
    # METHOD
    # =========================================================================

    @property
    def method(self) -> str:
        return self._method

    def with_method(self, method: str) -> "Request":
        """New request with ``method`` (upper-cased, must be a known method)."""
        return self._copy_with(method=_validate_method(method))

    # =========================================================================
    # URI
    # =========================================================================

    @property
    def uri(self) -> Optional[Uri]:
        return self._uri

    def with_uri(self, uri: UriInit) -> "Request":
        return self._copy_with(uri=_coerce_uri(uri))

    # =========================================================================
    # REQUEST TARGET
    # =========================================================================

    @property
    def request_target(self) -> str:
        """
        The explicit override if one was set, else the origin-form of the URI.

            no override, no URI          → "/"
            URI path "/a/b", query "x=1" → "/a/b?x=1"
            URI path "/a/b", no query    → "/a/b"
        """
        if self._request_target is not None:
            return self._request_target

        if self._uri is None:
            return "/"

        target = self._uri.path or "/"
        query = self._uri.query
        if query:
            target += f"?{query}"
        return target

    def with_request_target(self, request_target: str) -> "Request":
        """
        New request with a verbatim request-target.

        Accepts asterisk-form, origin-form, authority-form or absolute-form.

        Raises:
            ValidationError: If the target matches none of the forms.
        """
        if not _is_valid_request_target(request_target):
            logger.debug(f"Rejected request-target {request_target!r}")
            raise ValidationError(
                "Request target must be in one of absolute-form, authority-form, "
                "asterisk-form or origin-form",
                field="request_target",
            )
        return self._copy_with(request_target=request_target)

    # =========================================================================
    # HOST HEADER SYNTHESIS
    # =========================================================================

    def _header_store(self) -> HeaderCollection:
        """
        The header store as readers should see it.

        Adds a Host header taken from the URI when none was set explicitly.
        Works on a copy and reads the base store directly, so it never goes
        back through the public accessors.
        """
        if self._headers.has("host") or self._uri is None or not self._uri.host:
            return self._headers

        logger.debug(f"Synthesizing Host header from URI host {self._uri.host}")
        headers = self._headers.copy()
        headers.set("Host", format_host(self._uri.host))
        return headers

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._method} {self.request_target}>"


def _validate_method(method: str) -> str:
    if not isinstance(method, str) or method.upper() not in VALID_METHODS:
        logger.debug(f"Rejected method {method!r}")
        raise ValidationError(f"Invalid HTTP method: {method!r}", field="method")
    return method.upper()


def _coerce_uri(uri: UriInit) -> Optional[Uri]:
    if uri is None or isinstance(uri, Uri):
        return uri
    if isinstance(uri, str):
        return Uri(uri)
    raise ValidationError("URI must be a Uri or a string", field="uri")


def _is_valid_request_target(target: object) -> bool:
    if not isinstance(target, str) or not target:
        return False

    if target == "*":
        return True
    if ORIGIN_FORM_PATTERN.match(target) or AUTHORITY_FORM_PATTERN.match(target):
        return True

    # absolute-form: scheme + authority, no whitespace
    if any(ch.isspace() for ch in target):
        return False
    try:
        parts = urlsplit(target)
        parts.port  # raises on a malformed port
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc and parts.hostname)
