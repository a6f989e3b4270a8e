"""
Luxtronik Client
================

Client library for Luxtronik heat-pump controllers.

Reads the parameter, calculation and visibility banks over the
controller's TCP protocol (default port 8889), presents raw 32-bit words
as typed, unit-bearing values and encodes typed values for writing
parameters back.

Usage Example:
>>> from luxtronik import Session, new_calculations_map
>>>
>>> with Session("192.168.0.121:8889") as session:
...     calculations = new_calculations_map()
...     session.read_calculations(calculations)
...     print(calculations.version)

Architecture:

┌─────────────────┐
│     Caller      │  Drives refreshes, chooses values to write
└────────┬────────┘
         │
┌────────▼────────┐
│   RegisterMap   │  Typed descriptors (luxtronik.registers)
└────────┬────────┘
         │ raw u32 vectors
┌────────▼────────┐
│     Session     │  Command framing, global lock (luxtronik.protocol)
└────────┬────────┘
         │ TCP
┌────────▼────────┐
│   Controller    │
└─────────────────┘

License: MIT
"""

__version__ = "1.0.0"

from .errors import (
    ConfigurationError,
    FramingError,
    LengthMismatchError,
    LuxtronikError,
    NotConnectedError,
    TransportError,
    WritingNotAllowedError,
)

from .protocol import DEFAULT_PORT, Session, SessionOptions, SessionState

from .registers import (
    RegisterClass,
    RegisterDescriptor,
    RegisterMap,
    ReturnShape,
    new_calculations_map,
    new_parameter_map,
    new_visibilities_map,
)

__all__ = [
    # Errors
    "LuxtronikError",
    "TransportError",
    "FramingError",
    "LengthMismatchError",
    "WritingNotAllowedError",
    "ConfigurationError",
    "NotConnectedError",
    # Session
    "DEFAULT_PORT",
    "Session",
    "SessionOptions",
    "SessionState",
    # Registers
    "RegisterClass",
    "RegisterDescriptor",
    "RegisterMap",
    "ReturnShape",
    "new_parameter_map",
    "new_calculations_map",
    "new_visibilities_map",
]
