"""
=============================================================================
HEADER COLLECTION
=============================================================================

Case-insensitive, multi-valued header storage shared by every message type.

=============================================================================
STORAGE LAYOUT
=============================================================================

HTTP header NAMES are case-insensitive ("Content-Type" = "content-type")
but a message should go back out on the wire with the casing the
application chose. So we keep two tables keyed by the SAME lower-cased name:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        HeaderCollection                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   _values (canonical → values)      _names (canonical → emission)   │
    │   ─────────────────────────────     ──────────────────────────────  │
    │   "content-type" → ["text/html"]    "content-type" → "Content-Type" │
    │   "x-test"       → ["a", "b"]       "x-test"       → "X-Test"       │
    │   "set-cookie"   → ["a=1", "b=2"]   "set-cookie"   → "Set-Cookie"   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Lookups lower-case the requested name and hit _values. Emission walks
_names. There can never be two entries for the same canonical name.

=============================================================================
WHY KEEP VALUES AS LISTS?
=============================================================================

Joining repeated headers with "," is LOSSY for some headers:

    Set-Cookie: id=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT
                               ───┬───
                                  └── this comma is part of the value!

get_joined() is a convenience for the common case. Callers that need exact
values use get_lines().

=============================================================================
VALIDATION
=============================================================================

Every mutating call validates the WHOLE input before touching storage, so a
failing call leaves the collection exactly as it was:

    1. Name must be an RFC 7230 token ("X-Test", not "X Test" or "")
    2. Value must be a str or a non-empty list/tuple of str
    3. No CR/LF anywhere in a value (header injection:
       "ok\\r\\nSet-Cookie: admin=1" would smuggle a second header)

=============================================================================
"""

import logging
import re
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ..errors import ValidationError


logger = logging.getLogger(__name__)

HeaderValue = Union[str, Sequence[str]]

# token = 1*tchar (RFC 7230 section 3.2.6)
TOKEN_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class HeaderCollection:
    """
    Case-insensitive mapping of header name to an ordered list of values.

    Example:
        headers = HeaderCollection()
        headers.set("X-Test", ["a", "b"])
        headers.get_joined("x-test")      # "a,b"
        headers.get_lines("X-TEST")       # ["a", "b"]
        dict(headers.items())             # {"X-Test": ["a", "b"]}
    """

    def __init__(self, headers: Optional[Dict[str, HeaderValue]] = None):
        self._values: Dict[str, List[str]] = {}   # canonical → values
        self._names: Dict[str, str] = {}          # canonical → emission name

        for name, value in (headers or {}).items():
            self.append(name, value)

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def has(self, name: str) -> bool:
        """Case-insensitive existence check."""
        return isinstance(name, str) and name.lower() in self._values

    def get_lines(self, name: str) -> List[str]:
        """
        All values for ``name`` in insertion order.

        Returns a copy, so callers can't reach into storage. Empty list if
        the header is absent.
        """
        if not self.has(name):
            return []
        return list(self._values[name.lower()])

    def get_joined(self, name: str) -> Optional[str]:
        """
        Values joined with ",", or None if the header was never set.

        None (not "") lets callers tell "absent" apart from a header that
        was explicitly set to an empty string.
        """
        if not self.has(name):
            return None
        return ",".join(self._values[name.lower()])

    # =========================================================================
    # MUTATION
    # =========================================================================

    def set(self, name: str, value: HeaderValue) -> None:
        """Replace every value of ``name``; the given casing is kept for emission."""
        values = self._validate(name, value)
        key = name.lower()
        self._values[key] = values
        self._names[key] = name

    def append(self, name: str, value: HeaderValue) -> None:
        """Add values to ``name``, creating the header if it is absent."""
        values = self._validate(name, value)
        key = name.lower()
        self._values.setdefault(key, []).extend(values)
        self._names[key] = name

    def remove(self, name: str) -> None:
        """Drop a header. No-op if it isn't there."""
        if self.has(name):
            key = name.lower()
            del self._values[key]
            del self._names[key]

    def copy(self) -> "HeaderCollection":
        """Independent copy: value lists are not shared."""
        dup = HeaderCollection()
        dup._values = {key: list(values) for key, values in self._values.items()}
        dup._names = dict(self._names)
        return dup

    # =========================================================================
    # EMISSION
    # =========================================================================

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        """Yield (emission name, values) pairs in insertion order."""
        for key, name in self._names.items():
            yield name, list(self._values[key])

    def to_dict(self) -> Dict[str, List[str]]:
        return dict(self.items())

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names.values()))

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderCollection):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"

    # =========================================================================
    # VALIDATION
    # =========================================================================

    @staticmethod
    def _validate(name: str, value: HeaderValue) -> List[str]:
        """
        Check a name/value pair and return the values as a fresh list.

        Accepts a single string or a list/tuple of strings. Anything else
        (including bytes, ints and empty lists) is rejected.
        """
        if not isinstance(name, str) or not TOKEN_PATTERN.match(name):
            logger.debug(f"Rejected header name: {name!r}")
            raise ValidationError(f"Invalid header name: {name!r}", field="header")

        if isinstance(value, str):
            values = [value]
        elif isinstance(value, (list, tuple)):
            values = list(value)
        else:
            logger.debug(f"Rejected value for header {name}: {value!r}")
            raise ValidationError(
                "Header values must be a string or a list of strings",
                field="header",
            )

        if not values:
            raise ValidationError(
                f"Header {name} needs at least one value", field="header"
            )

        for item in values:
            if not isinstance(item, str):
                logger.debug(f"Rejected value for header {name}: {item!r}")
                raise ValidationError(
                    "Header values must be a string or a list of strings",
                    field="header",
                )
            if "\r" in item or "\n" in item:
                logger.debug(f"Rejected CR/LF in header {name}")
                raise ValidationError(
                    f"Header {name} contains a line break", field="header"
                )

        return values
