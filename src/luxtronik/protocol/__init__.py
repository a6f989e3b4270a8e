"""
Luxtronik Protocol Package
==========================

TCP client for the Luxtronik heat-pump control protocol.

This package provides a pure protocol layer:
- Wire codec (big-endian words, exact reads)
- Session with command framing and process-wide locking

It does NOT:
- Decide what values mean (see luxtronik.registers)
- Schedule periodic reads (the caller drives refreshes)
- Discover controllers on the network

Components:
- wire.py: Byte-level encoding/decoding on a stream transport
- session.py: Connection lifecycle, command verbs, reply framing

License: MIT
"""

from .wire import WireEncoder, WireDecoder, WireTransport

from .session import (
    CALCULATIONS_READ,
    DEFAULT_PORT,
    PARAMETERS_READ,
    PARAMETERS_WRITE,
    VISIBILITIES_READ,
    Session,
    SessionOptions,
    SessionState,
    split_host_port,
)

__all__ = [
    # Wire codec
    "WireEncoder",
    "WireDecoder",
    "WireTransport",
    # Session
    "Session",
    "SessionOptions",
    "SessionState",
    "split_host_port",
    "DEFAULT_PORT",
    "PARAMETERS_WRITE",
    "PARAMETERS_READ",
    "CALCULATIONS_READ",
    "VISIBILITIES_READ",
]
