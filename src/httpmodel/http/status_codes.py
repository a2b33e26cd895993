"""
=============================================================================
HTTP STATUS CODES AND REASON PHRASES
=============================================================================

The fixed status -> reason-phrase table used by Response.with_status() when
the caller does not supply a phrase of its own.

=============================================================================
WHERE THE PHRASES COME FROM
=============================================================================

    ┌────────────────────────────────────────────────────────────────────┐
    │                       REASON PHRASE SOURCES                        │
    ├──────────────┬─────────────────────────────────────────────────────┤
    │  RFC 7231    │ The core 1xx-5xx codes (200 OK, 404 Not Found, ...) │
    │  IANA        │ WebDAV and later additions (207, 422, 429, 511...)  │
    │  Extensions  │ Non-registered codes seen in the wild:             │
    │              │   420 Enhance Your Calm (Twitter rate limiting)    │
    └──────────────┴─────────────────────────────────────────────────────┘

Callers rely on these phrases verbatim (they end up on the status line), so
the table is closed: codes not listed here have NO default phrase and
reason_phrase() returns an empty string for them (418, 451, 103, ...).

307 reads "Temporary Redirect" as registered, not "Temporary Request".

    HTTP/1.1 404 Not Found
             ─── ─────────
              │      │
              │      └── reason_phrase(404)
              └───────── status code

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes with their default reason phrases.
    
    Each member is an int, so it compares and formats like one:
    
        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    
    The phrase travels with the member (member value is the code, the
    phrase is attached in __new__) so the enum IS the table.
    """
    
    def __new__(cls, code: int, phrase: str):
        member = int.__new__(cls, code)
        member._value_ = code
        member.phrase = phrase
        return member
    
    # 1xx Informational
    CONTINUE = 100, "Continue"
    SWITCHING_PROTOCOLS = 101, "Switching Protocols"
    PROCESSING = 102, "Processing"
    
    # 2xx Success
    OK = 200, "OK"
    CREATED = 201, "Created"
    ACCEPTED = 202, "Accepted"
    NON_AUTHORITATIVE_INFORMATION = 203, "Non-Authoritative Information"
    NO_CONTENT = 204, "No Content"
    RESET_CONTENT = 205, "Reset Content"
    PARTIAL_CONTENT = 206, "Partial Content"
    MULTI_STATUS = 207, "Multi-Status"
    ALREADY_REPORTED = 208, "Already Reported"
    
    # 3xx Redirection
    MULTIPLE_CHOICES = 300, "Multiple Choices"
    MOVED_PERMANENTLY = 301, "Moved Permanently"
    FOUND = 302, "Found"
    SEE_OTHER = 303, "See Other"
    NOT_MODIFIED = 304, "Not Modified"
    USE_PROXY = 305, "Use Proxy"
    TEMPORARY_REDIRECT = 307, "Temporary Redirect"
    PERMANENT_REDIRECT = 308, "Permanent Redirect"
    
    # 4xx Client Errors
    BAD_REQUEST = 400, "Bad Request"
    UNAUTHORIZED = 401, "Unauthorized"
    PAYMENT_REQUIRED = 402, "Payment Required"
    FORBIDDEN = 403, "Forbidden"
    NOT_FOUND = 404, "Not Found"
    METHOD_NOT_ALLOWED = 405, "Method Not Allowed"
    NOT_ACCEPTABLE = 406, "Not Acceptable"
    PROXY_AUTHENTICATION_REQUIRED = 407, "Proxy Authentication Required"
    REQUEST_TIMEOUT = 408, "Request Timeout"
    CONFLICT = 409, "Conflict"
    GONE = 410, "Gone"
    LENGTH_REQUIRED = 411, "Length Required"
    PRECONDITION_FAILED = 412, "Precondition Failed"
    PAYLOAD_TOO_LARGE = 413, "Payload Too Large"
    URI_TOO_LONG = 414, "URI Too Long"
    UNSUPPORTED_MEDIA_TYPE = 415, "Unsupported Media Type"
    RANGE_NOT_SATISFIABLE = 416, "Range Not Satisfiable"
    EXPECTATION_FAILED = 417, "Expectation Failed"
    ENHANCE_YOUR_CALM = 420, "Enhance Your Calm"   # Twitter, not registered
    MISDIRECTED_REQUEST = 421, "Misdirected Request"
    UNPROCESSABLE_ENTITY = 422, "Unprocessable Entity"
    LOCKED = 423, "Locked"
    FAILED_DEPENDENCY = 424, "Failed Dependency"
    UPGRADE_REQUIRED = 426, "Upgrade Required"
    PRECONDITION_REQUIRED = 428, "Precondition Required"
    TOO_MANY_REQUESTS = 429, "Too Many Requests"
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431, "Request Header Fields Too Large"
    
    # 5xx Server Errors
    INTERNAL_SERVER_ERROR = 500, "Internal Server Error"
    NOT_IMPLEMENTED = 501, "Not Implemented"
    BAD_GATEWAY = 502, "Bad Gateway"
    SERVICE_UNAVAILABLE = 503, "Service Unavailable"
    GATEWAY_TIMEOUT = 504, "Gateway Timeout"
    HTTP_VERSION_NOT_SUPPORTED = 505, "HTTP Version Not Supported"
    VARIANT_ALSO_NEGOTIATES = 506, "Variant Also Negotiates"
    INSUFFICIENT_STORAGE = 507, "Insufficient Storage"
    LOOP_DETECTED = 508, "Loop Detected"
    NOT_EXTENDED = 510, "Not Extended"
    NETWORK_AUTHENTICATION_REQUIRED = 511, "Network Authentication Required"


def reason_phrase(code: int) -> str:
    """
    Look up the default reason phrase for a status code.
    
    Returns an empty string for codes outside the table (e.g. 999), never
    a placeholder like "Unknown": an empty phrase is valid on the wire.
    """
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def status_class(code: int) -> int:
    """Return the hundreds digit of a code: 4 for 404, 5 for 503."""
    return code // 100
