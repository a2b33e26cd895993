"""
=============================================================================
HTTPMODEL - In-Memory HTTP Message Model
=============================================================================

Value objects for HTTP requests, responses and URIs that a web framework or
HTTP client builds, inspects and transforms before a message goes onto the
wire (or after an incoming one has been parsed off it).

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpmodel/
    ├── __init__.py            # This file - package exports
    ├── config.py              # MessageConfig dataclass
    ├── errors.py              # ValidationError
    ├── factory.py             # MessageFactory
    ├── log.py                 # Logging setup
    └── http/
        ├── headers.py         # HeaderCollection
        ├── uri.py             # Uri
        ├── message.py         # Message (version, headers, body)
        ├── request.py         # Request
        ├── response.py        # Response
        ├── server_request.py  # ServerRequest, AttributeBag
        └── status_codes.py    # HTTPStatus + reason phrases

=============================================================================
QUICK START
=============================================================================

    import io
    from httpmodel import Request, Response, Uri

    request = (Request("post", "https://api.example.com/users?notify=1")
        .with_header("Content-Type", "application/json")
        .with_body(io.BytesIO(b'{"name": "alice"}')))

    request.method               # "POST"
    request.request_target       # "/users?notify=1"
    request.get_header("Host")   # "api.example.com"

    response = Response().with_status(201)
    response.status_line         # "HTTP/1.1 201 Created"

    Uri("https://example.com:443/").port   # None (standard port)

=============================================================================
"""

__version__ = "1.0.0"

from .config import MessageConfig
from .errors import ValidationError
from .factory import MessageFactory
from .http import (
    HeaderCollection,
    HTTPStatus,
    Message,
    Request,
    Response,
    ServerRequest,
    Uri,
)
from .log import configure_logging

__all__ = [
    "HeaderCollection",
    "HTTPStatus",
    "Message",
    "MessageConfig",
    "MessageFactory",
    "Request",
    "Response",
    "ServerRequest",
    "Uri",
    "ValidationError",
    "configure_logging",
    "__version__",
]
