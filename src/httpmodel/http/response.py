"""
=============================================================================
HTTP RESPONSE
=============================================================================

A response message: numeric status code and reason phrase layered on
Message.

    HTTP/1.1 404 Not Found
    ────┬─── ─┬─ ────┬────
        │     │      │
    Version  Code  Reason phrase

When no reason phrase is supplied, the default for the code is taken from
HTTPStatus. Codes without a default (999, or anything unregistered) get an
empty reason phrase, which is valid on the wire.

=============================================================================
"""

import logging
from typing import Optional, Tuple

from ..errors import ValidationError
from .message import Body, HeadersInit, Message
from .status_codes import reason_phrase, status_class


logger = logging.getLogger(__name__)


class Response(Message):
    """
    An HTTP response.

    Args:
        status: Status code, 200 by default.
        reason: Reason phrase; "" means "use the default for the code".
        headers: Initial headers (see Message).
        body: Stream handle with read()/write().
        protocol_version: "1.1" by default.

    Example:
        response = Response().with_status(404)
        response.reason_phrase        # "Not Found"
        response.status_line          # "HTTP/1.1 404 Not Found"
    """

    def __init__(
        self,
        status: int = 200,
        reason: str = "",
        headers: HeadersInit = None,
        body: Optional[Body] = None,
        protocol_version: str = "1.1",
    ):
        super().__init__(headers=headers, body=body, protocol_version=protocol_version)
        self._status_code, self._reason_phrase = _resolve_status(status, reason)

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def reason_phrase(self) -> str:
        return self._reason_phrase

    def with_status(self, code: int, reason: Optional[str] = None) -> "Response":
        """
        New response with status ``code``.

        Args:
            code: Status code, coerced to int. Not range-checked: extension
                  codes are passed through as-is.
            reason: Reason phrase. Omitted or empty → default for the code,
                    or "" when the code has none.

        Raises:
            ValidationError: If ``code`` isn't integral or ``reason`` isn't a
                             string.
        """
        status_code, phrase = _resolve_status(code, reason)
        return self._copy_with(status_code=status_code, reason_phrase=phrase)

    @property
    def status_line(self) -> str:
        """
        The status line without CRLF.

        Format: "HTTP/" VERSION SP STATUS-CODE SP REASON-PHRASE
        """
        return f"HTTP/{self.protocol_version} {self._status_code} {self._reason_phrase}"

    # =========================================================================
    # STATUS CATEGORIES
    # =========================================================================

    @property
    def is_informational(self) -> bool:
        return status_class(self._status_code) == 1

    @property
    def is_success(self) -> bool:
        return status_class(self._status_code) == 2

    @property
    def is_redirect(self) -> bool:
        return status_class(self._status_code) == 3

    @property
    def is_client_error(self) -> bool:
        return status_class(self._status_code) == 4

    @property
    def is_server_error(self) -> bool:
        return status_class(self._status_code) == 5

    def __repr__(self) -> str:
        return f"<{type(self).__name__} [{self._status_code}]>"


def _resolve_status(code: int, reason: Optional[str]) -> Tuple[int, str]:
    if isinstance(code, bool) or (isinstance(code, float) and not code.is_integer()):
        raise ValidationError("Status code must be an integer", field="status")
    try:
        status_code = int(code)
    except (TypeError, ValueError) as e:
        logger.debug(f"Rejected status code {code!r}")
        raise ValidationError(f"Status code must be an integer: {code!r}", field="status") from e

    if reason is not None and not isinstance(reason, str):
        raise ValidationError("Reason phrase must be a string", field="reason")

    return status_code, reason or reason_phrase(status_code)
