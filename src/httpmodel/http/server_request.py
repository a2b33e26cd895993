"""
=============================================================================
SERVER-SIDE REQUEST
=============================================================================

The request as a framework sees it after the transport has done its work:
a Request plus everything the hosting process knows about it.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         ServerRequest                               │
    ├─────────────────────┬───────────────────────────────────────────────┤
    │  server_params      │ environment snapshot (read-only)              │
    │  file_params        │ upload metadata (read-only)                   │
    │  cookie_params      │ cookies sent by the client                    │
    │  query_params       │ decoded query string                          │
    │  parsed_body        │ decoded body: mapping / list / record / None  │
    │  attributes         │ framework data (route params, session, ...)  │
    └─────────────────────┴───────────────────────────────────────────────┘

=============================================================================
THE ATTRIBUTE BAG
=============================================================================

Everything else on a message is replaced through copy-returning with_*
methods. Attributes are different: they are where routing, auth and
session middleware ACCUMULATE data while one request is being handled, so
the bag is mutated in place.

    request.with_attribute("user_id", 42)      # same request object back
    request.get_attribute("user_id")           # 42
    request.get_attribute("missing", "n/a")    # "n/a"

A copy made by any other with_* method gets its own bag, so two request
objects never share attribute state.

=============================================================================
"""

import logging
from collections.abc import Mapping, MutableMapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional

from ..errors import ValidationError
from .message import Body, HeadersInit
from .request import Request, UriInit


logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)


class AttributeBag(MutableMapping):
    """
    Per-request key/value store for framework-derived data.

    A plain MutableMapping with string keys, so dict-style access works
    alongside the request's get/with/without_attribute methods.
    """

    def __init__(self, initial: Optional[Mapping] = None):
        self._data: Dict[str, Any] = {}
        if initial:
            self.update(initial)

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if not isinstance(name, str):
            raise ValidationError("Attribute names must be strings", field="attribute")
        self._data[name] = value

    def __delitem__(self, name: str) -> None:
        del self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def copy(self) -> "AttributeBag":
        return AttributeBag(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


class ServerRequest(Request):
    """
    An incoming request with its environment, cookies, query, uploads,
    parsed body and attributes.

    Args:
        method, uri, headers, body, protocol_version: See Request.
        server_params: Environment snapshot from the hosting process.
        cookie_params: Cookie name → value.
        query_params: Decoded query arguments.
        file_params: Upload metadata. Only settable here.
        parsed_body: Decoded body (mapping, list or record object), or None.

    Raises:
        ValidationError: If a params argument isn't a mapping or the parsed
                         body is a scalar.
    """

    def __init__(
        self,
        method: str = "GET",
        uri: UriInit = None,
        headers: HeadersInit = None,
        body: Optional[Body] = None,
        protocol_version: str = "1.1",
        server_params: Optional[Mapping] = None,
        cookie_params: Optional[Mapping] = None,
        query_params: Optional[Mapping] = None,
        file_params: Optional[Mapping] = None,
        parsed_body: Any = None,
    ):
        super().__init__(
            method=method,
            uri=uri,
            headers=headers,
            body=body,
            protocol_version=protocol_version,
        )
        self._server_params = MappingProxyType(_as_dict(server_params, "server_params"))
        self._file_params = MappingProxyType(_as_dict(file_params, "file_params"))
        self._cookie_params = _as_dict(cookie_params, "cookie_params")
        self._query_params = _as_dict(query_params, "query_params")
        self._parsed_body = _validate_parsed_body(parsed_body)
        self._attributes = AttributeBag()

    # =========================================================================
    # READ-ONLY SNAPSHOTS
    # =========================================================================

    @property
    def server_params(self) -> Mapping:
        return self._server_params

    @property
    def file_params(self) -> Mapping:
        return self._file_params

    # =========================================================================
    # REPLACEABLE PARAMETERS
    # =========================================================================

    @property
    def cookie_params(self) -> Dict[str, Any]:
        return dict(self._cookie_params)

    def with_cookie_params(self, cookies: Mapping) -> "ServerRequest":
        return self._copy_with(cookie_params=_as_dict(cookies, "cookie_params"))

    @property
    def query_params(self) -> Dict[str, Any]:
        """
        Decoded query arguments.

        Not kept in sync with the URI: replacing these leaves the URI (and
        server_params) untouched.
        """
        return dict(self._query_params)

    def with_query_params(self, query: Mapping) -> "ServerRequest":
        return self._copy_with(query_params=_as_dict(query, "query_params"))

    @property
    def parsed_body(self) -> Any:
        return self._parsed_body

    def with_parsed_body(self, data: Any) -> "ServerRequest":
        """New request with ``data`` as the parsed body (None for no body)."""
        return self._copy_with(parsed_body=_validate_parsed_body(data))

    # =========================================================================
    # ATTRIBUTES (mutated in place)
    # =========================================================================

    @property
    def attributes(self) -> AttributeBag:
        return self._attributes

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> "ServerRequest":
        """Store ``value`` under ``name`` on THIS request and return it."""
        self._attributes[name] = value
        return self

    def without_attribute(self, name: str) -> "ServerRequest":
        """Remove ``name`` from this request's attributes (no-op if absent)."""
        self._attributes.pop(name, None)
        return self

    def _clone(self):
        dup = super()._clone()
        dup._attributes = self._attributes.copy()
        return dup


def _as_dict(value: Optional[Mapping], field: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        logger.debug(f"Rejected non-mapping {field}: {type(value).__name__}")
        raise ValidationError(f"{field} must be a mapping", field=field)
    return dict(value)


def _validate_parsed_body(data: Any) -> Any:
    """
    Accept structured data only.

    Mappings, lists/tuples and record objects (dataclasses or anything with
    a __dict__) pass; scalars like "a=1", b"{}" or 42 are rejected.
    """
    if data is None:
        return None
    if isinstance(data, _SCALAR_TYPES):
        logger.debug(f"Rejected scalar parsed body of type {type(data).__name__}")
        raise ValidationError(
            "Parsed body must be a mapping, a list or an object", field="parsed_body"
        )
    if isinstance(data, (Mapping, list, tuple)) or hasattr(data, "__dict__"):
        return data
    raise ValidationError(
        "Parsed body must be a mapping, a list or an object", field="parsed_body"
    )
