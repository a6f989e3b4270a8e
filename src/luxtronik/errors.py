"""
Luxtronik Client Errors
=======================

Exception hierarchy for the controller client.

Every error raised by the library derives from LuxtronikError, so callers
can catch one base class or discriminate on the specific kind:

- TransportError: socket dial/read/write failure
- FramingError: reply does not follow the expected framing
- LengthMismatchError: raw vector length differs from the register map
- WritingNotAllowedError: a value cannot be encoded for writing
- ConfigurationError: malformed session configuration
- NotConnectedError: operation on a session that is not connected

License: MIT
"""

from typing import Any, Dict, Optional


class LuxtronikError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload


class TransportError(LuxtronikError):
    """Raised when the underlying network operation fails."""


class FramingError(LuxtronikError):
    """Raised when a reply from the controller is malformed or truncated."""


class LengthMismatchError(FramingError):
    """Raised when a raw vector does not match the size of a register map."""


class WritingNotAllowedError(LuxtronikError):
    """Raised when a value cannot or must not be written to the controller."""


class ConfigurationError(LuxtronikError, ValueError):
    """Raised for invalid session configuration (e.g. malformed host:port)."""


class NotConnectedError(LuxtronikError):
    """Raised when a session operation requires an open connection."""
