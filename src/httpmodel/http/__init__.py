"""
=============================================================================
HTTP MESSAGE MODEL
=============================================================================

In-memory HTTP messages that frameworks and clients build, inspect and
transform before serializing them (or after a transport parsed them).

    ┌─────────────────────────────────────────────────────────────────────┐
    │ HEADERS (headers.py)                                                │
    │   Case-insensitive, multi-valued store; preserves emission casing   │
    ├─────────────────────────────────────────────────────────────────────┤
    │ URI (uri.py)                                                        │
    │   Parse / rebuild URIs, standard-port suppression, safe encoding    │
    ├─────────────────────────────────────────────────────────────────────┤
    │ MESSAGE (message.py)                                                │
    │   Protocol version + headers + opaque body handle                   │
    ├─────────────────────────────────────────────────────────────────────┤
    │ REQUEST / RESPONSE (request.py, response.py)                        │
    │   Method, URI, request-target, Host synthesis / status + reason     │
    ├─────────────────────────────────────────────────────────────────────┤
    │ SERVER REQUEST (server_request.py)                                  │
    │   Environment, cookies, query, uploads, parsed body, attributes     │
    ├─────────────────────────────────────────────────────────────────────┤
    │ STATUS CODES (status_codes.py)                                      │
    │   HTTPStatus enum with the default reason phrases                   │
    └─────────────────────────────────────────────────────────────────────┘

No I/O happens anywhere in this package.

=============================================================================
"""

from .headers import HeaderCollection
from .message import Body, Message
from .request import Request, VALID_METHODS
from .response import Response
from .server_request import AttributeBag, ServerRequest
from .status_codes import HTTPStatus, reason_phrase
from .uri import STANDARD_PORTS, Uri, encode_path, encode_query, format_host

# Public API - what you get when you do:
# from httpmodel.http import *
__all__ = [
    # Building blocks
    "HeaderCollection",
    "Uri",
    "STANDARD_PORTS",
    "encode_path",
    "encode_query",
    "format_host",
    
    # Messages
    "Body",
    "Message",
    "Request",
    "Response",
    "ServerRequest",
    "AttributeBag",
    "VALID_METHODS",
    
    # Status codes
    "HTTPStatus",
    "reason_phrase",
]
