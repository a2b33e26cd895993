"""
Exceptions raised by the message model.

Every failure in this package is a synchronous validation failure raised at
the point of violation. Nothing is retried and nothing is transient: a
ValidationError means the caller passed something the model cannot store,
and the object it was called on is left exactly as it was.
"""

from typing import Optional


class ValidationError(ValueError):
    """
    Raised when a value cannot be accepted by a message component.
    
    Subclasses ValueError so callers that already guard input conversion
    with ``except ValueError`` keep working.
    
    The optional ``field`` names the component that rejected the value
    ("port", "method", "header", ...) which is handy when turning the error
    into a 400 response:
    
        try:
            request = request.with_method(raw_method)
        except ValidationError as e:
            return bad_request(f"{e.field}: {e}")
    """
    
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field  # Component that rejected the value
