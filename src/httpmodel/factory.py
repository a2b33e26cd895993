"""
=============================================================================
MESSAGE FACTORY
=============================================================================

Builds messages with the defaults from a MessageConfig, so application code
doesn't repeat the protocol version and extra scheme ports everywhere.

    factory = MessageFactory(MessageConfig(protocol_version="1.0"))

    request = factory.create_request("GET", "https://example.com/")
    request.protocol_version        # "1.0"

For server requests the factory also does the two derivations a transport
adaptor usually wants:

    ┌──────────────────────────────┬──────────────────────────────────────┐
    │  Source                      │  Becomes                             │
    ├──────────────────────────────┼──────────────────────────────────────┤
    │  URI query "a=1&a=2&b="      │  query_params {"a": ["1","2"],      │
    │                              │                "b": [""]}            │
    │  server_params["HTTP_COOKIE"]│  cookie_params {"sid": "abc"}        │
    │  "sid=abc"                   │                                      │
    └──────────────────────────────┴──────────────────────────────────────┘

=============================================================================
"""

import logging
from http.cookies import CookieError, SimpleCookie
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import parse_qs

from .config import MessageConfig
from .errors import ValidationError
from .http.request import Request
from .http.response import Response
from .http.server_request import ServerRequest
from .http.uri import Uri


logger = logging.getLogger(__name__)


class MessageFactory:
    """
    Creates Uri, Request, Response and ServerRequest objects.

    Args:
        config: Defaults to apply. MessageConfig() if omitted. Validated
                immediately (ValueError on a bad setting).
    """

    def __init__(self, config: Optional[MessageConfig] = None):
        self.config = config or MessageConfig()
        self.config.validate()

    def create_uri(self, uri: str = "") -> Uri:
        return Uri(uri, scheme_ports=self.config.scheme_ports)

    def create_request(self, method: str, uri: Union[Uri, str, None] = None) -> Request:
        return Request(
            method=method,
            uri=self._uri(uri),
            protocol_version=self.config.protocol_version,
        )

    def create_response(self, code: int = 200, reason: str = "") -> Response:
        return Response(
            status=code,
            reason=reason,
            protocol_version=self.config.protocol_version,
        )

    def create_server_request(
        self,
        method: str,
        uri: Union[Uri, str, None] = None,
        server_params: Optional[Mapping] = None,
    ) -> ServerRequest:
        """
        Create a ServerRequest with query and cookie params filled in.

        Query params come from the URI query (every value a list, blank
        values kept). Cookie params come from server_params["HTTP_COOKIE"]
        when the hosting process supplies it; a name sent twice keeps its
        first value.
        """
        uri = self._uri(uri)
        server_params = server_params or {}
        query = parse_qs(uri.query, keep_blank_values=True) if uri is not None else {}

        return ServerRequest(
            method=method,
            uri=uri,
            protocol_version=self.config.protocol_version,
            server_params=server_params,
            cookie_params=_parse_cookies(server_params.get("HTTP_COOKIE", "")),
            query_params=query,
        )

    def _uri(self, uri: Union[Uri, str, None]) -> Optional[Uri]:
        if isinstance(uri, str):
            return self.create_uri(uri)
        return uri


def _parse_cookies(header: Any) -> Dict[str, str]:
    if not header:
        return {}
    if not isinstance(header, str):
        raise ValidationError("HTTP_COOKIE must be a string", field="cookie_params")

    # One pair per load: a repeated name keeps its first value
    cookies: Dict[str, str] = {}
    for pair in header.split(";"):
        if not pair.strip():
            continue
        cookie = SimpleCookie()
        try:
            cookie.load(pair)
        except CookieError as e:
            logger.warning(f"Ignoring malformed cookie {pair.strip()!r}: {e}")
            continue
        for name, morsel in cookie.items():
            cookies.setdefault(name, morsel.value)
    return cookies
