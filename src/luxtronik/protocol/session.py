"""
Luxtronik Session
=================

One TCP connection to one heat-pump controller.

The session issues the four command verbs, parses the per-command reply
framing and hands the decoded raw vectors to a register map.

Command Vocabulary (signed 32-bit big-endian request words):
- 3002 ParametersWrite: index, value
- 3003 ParametersRead: 0
- 3004 CalculationsRead: 0
- 3005 VisibilitiesRead: 0

Read Reply Framing:
1. uint32 command echo (must match the request)
2. uint32 status word (CalculationsRead only, discarded)
3. uint32 length N
4. N entries: one byte each for VisibilitiesRead, uint32 otherwise

Locking:
The controller becomes unstable when socket operations overlap, so one
process-wide lock serializes every request/response exchange across all
sessions. This is part of the protocol contract.

License: MIT
"""

import logging
import socket
import threading
from contextlib import suppress
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from ..errors import (
    ConfigurationError,
    FramingError,
    NotConnectedError,
    TransportError,
    WritingNotAllowedError,
)
from ..registers.register_map import RegisterMap
from .wire import INT32_MAX, UINT32_MAX, WireEncoder, WireTransport

DEFAULT_PORT = "8889"
DEFAULT_DIAL_TIMEOUT = 60.0

# Upper bound on reply entries, far above any known firmware
MAX_REPLY_ENTRIES = 65535

PARAMETERS_WRITE = 3002
PARAMETERS_READ = 3003
CALCULATIONS_READ = 3004
VISIBILITIES_READ = 3005

COMMAND_NAMES = {
    PARAMETERS_WRITE: "ParametersWrite",
    PARAMETERS_READ: "ParametersRead",
    CALCULATIONS_READ: "CalculationsRead",
    VISIBILITIES_READ: "VisibilitiesRead",
}

# Shared by every session in the process
_GLOBAL_LOCK = threading.RLock()


class SessionState(Enum):
    """Connection lifecycle of a session."""

    UNCONNECTED = "unconnected"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass
class SessionOptions:
    """Configuration for a controller session."""

    # Called with the connected socket, e.g. to set timeouts or keepalive
    conn_callback: Optional[Callable[[socket.socket], None]] = None

    # Reserved, informational only
    safe_mode: bool = True

    # Applies to connect only; values below 1 s fall back to the default
    dial_timeout: float = DEFAULT_DIAL_TIMEOUT

    logger: Optional[logging.Logger] = None


def split_host_port(host_port: str) -> Tuple[str, str]:
    """
    Split 'host:port' into its parts.

    Accepts 'host', 'host:port', '[v6addr]' and '[v6addr]:port'. A missing
    port falls back to DEFAULT_PORT.

    Raises:
        ConfigurationError: If the address is malformed
    """
    if not isinstance(host_port, str) or not host_port.strip():
        raise ConfigurationError(f"invalid address {host_port!r}: empty")

    text = host_port.strip()

    if text.startswith("["):
        end = text.find("]")
        if end < 0:
            raise ConfigurationError(f"invalid address {host_port!r}: missing ']'")
        host = text[1:end]
        rest = text[end + 1 :]
        if rest == "":
            port = DEFAULT_PORT
        elif rest.startswith(":"):
            port = rest[1:]
        else:
            raise ConfigurationError(
                f"invalid address {host_port!r}: unexpected {rest!r} after ']'"
            )
    elif text.count(":") > 1:
        raise ConfigurationError(
            f"invalid address {host_port!r}: too many colons (bracket IPv6 hosts)"
        )
    elif ":" in text:
        host, port = text.split(":", 1)
    else:
        host, port = text, DEFAULT_PORT

    if not host:
        raise ConfigurationError(f"invalid address {host_port!r}: missing host")

    if not port.isdigit() or not 0 < int(port) <= 65535:
        raise ConfigurationError(f"invalid address {host_port!r}: bad port {port!r}")

    return host, port


class Session:
    """
    Blocking client session for one controller.

    Usage:
        >>> session = Session("192.168.0.121:8889")
        >>> session.connect()
        >>> calculations = new_calculations_map()
        >>> session.read_calculations(calculations)
        >>> calculations[10].decode()
        21.5
        >>> session.close()
    """

    def __init__(self, host_port: str, options: Optional[SessionOptions] = None):
        """
        Initialize session (does not connect).

        Raises:
            ConfigurationError: If host_port is malformed
        """
        self.host, self.port = split_host_port(host_port)
        self.options = replace(options) if options else SessionOptions()

        if self.options.dial_timeout < 1:
            self.options.dial_timeout = DEFAULT_DIAL_TIMEOUT

        self.logger = self.options.logger or logging.getLogger(__name__)

        self.state = SessionState.UNCONNECTED
        self.conn: Optional[socket.socket] = None
        self._transport: Optional[WireTransport] = None

    def __enter__(self) -> "Session":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def address(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @property
    def is_connected(self) -> bool:
        return self.state == SessionState.CONNECTED

    def connect(self):
        """
        Open the TCP connection, reusing an existing one.

        Raises:
            TransportError: If the dial fails
            NotConnectedError: If the session was already closed
        """
        if self.state == SessionState.CONNECTED:
            return
        if self.state == SessionState.CLOSED:
            raise NotConnectedError(
                f"session to {self.address} is closed; create a new session"
            )

        try:
            conn = socket.create_connection(
                (self.host, int(self.port)), timeout=self.options.dial_timeout
            )
        except OSError as e:
            raise TransportError(
                f"connect to {self.address} failed: {e}",
                payload={"operation": "connect", "address": self.address},
            ) from e

        # Dial timeout must not leak into reads and writes
        conn.settimeout(None)

        self.conn = conn
        self._transport = WireTransport(conn)
        self.state = SessionState.CONNECTED

        if self.options.conn_callback is not None:
            self.options.conn_callback(conn)

        self.logger.info(
            f"Connected to Luxtronik controller {self.address} "
            f"(safe_mode={self.options.safe_mode})"
        )

    def close(self):
        """Close the connection; closing an unconnected session is a no-op."""
        if self.state != SessionState.CONNECTED:
            return

        conn = self.conn
        self.conn = None
        self._transport = None
        self.state = SessionState.CLOSED

        try:
            conn.close()
        except OSError as e:
            raise TransportError(
                f"close of {self.address} failed: {e}", payload={"operation": "close"}
            ) from e

        self.logger.info(f"Connection to {self.address} closed")

    def _require_transport(self) -> WireTransport:
        if self.state != SessionState.CONNECTED or self._transport is None:
            raise NotConnectedError(
                f"session to {self.address} is not connected ({self.state.value})"
            )
        return self._transport

    def _abort(self, reason: str):
        """Drop a connection whose stream is no longer aligned to a reply."""
        self.logger.error(f"Closing {self.address}: {reason}")

        conn = self.conn
        self.conn = None
        self._transport = None
        self.state = SessionState.CLOSED

        if conn is not None:
            with suppress(OSError):
                conn.close()

    def _send(self, transport: WireTransport, *words: int) -> int:
        with _GLOBAL_LOCK:
            return transport.write_int32s(words, operation=f"send {words[0]}")

    def read_parameters(self, register_map: RegisterMap):
        """Read the parameter bank into ``register_map``."""
        self._read_into(register_map, PARAMETERS_READ)

    def read_calculations(self, register_map: RegisterMap):
        """Read the calculation bank into ``register_map``."""
        self._read_into(register_map, CALCULATIONS_READ)

    def read_visibilities(self, register_map: RegisterMap):
        """Read the visibility bank into ``register_map``."""
        self._read_into(register_map, VISIBILITIES_READ)

    def _read_into(self, register_map: RegisterMap, command: int):
        values = self.read_raw(command)
        register_map.set_raw_values(values)

    def read_raw(self, command: int) -> List[int]:
        """
        Issue one read command and return the raw reply vector.

        Args:
            command: PARAMETERS_READ, CALCULATIONS_READ or VISIBILITIES_READ

        Raises:
            NotConnectedError: If the session is not connected
            TransportError: On socket failure
            FramingError: On echo mismatch or truncated reply

        A transport or framing failure leaves unread reply bytes in the
        stream, so the session is closed before the error propagates; callers
        construct a new session to continue.
        """
        if command not in (PARAMETERS_READ, CALCULATIONS_READ, VISIBILITIES_READ):
            raise ValueError(f"{command} is not a read command")

        transport = self._require_transport()
        name = COMMAND_NAMES[command]

        with _GLOBAL_LOCK:
            try:
                values = self._exchange(transport, command, name)
            except (FramingError, TransportError) as e:
                self._abort(f"{name} failed: {e}")
                raise

        return values

    def _exchange(self, transport: WireTransport, command: int, name: str) -> List[int]:
        self._send(transport, command, 0)

        echo = transport.read_uint32(f"{name} command echo")
        if echo != command:
            self.logger.error(f"{name}: controller echoed {echo}")
            raise FramingError(
                f"{name}: invalid command echoed: {echo} want: {command}",
                payload={"command": command, "echo": echo},
            )

        if command == CALCULATIONS_READ:
            status = transport.read_uint32(f"{name} status")
            self.logger.debug(f"{name}: status word {status}")

        length = transport.read_uint32(f"{name} length")
        if length > MAX_REPLY_ENTRIES:
            self.logger.error(f"{name}: implausible reply length {length}")
            raise FramingError(
                f"{name}: unexpected reply length {length}",
                payload={"command": command, "length": length},
            )
        self.logger.debug(f"{name}: receiving {length} entries")

        if command == VISIBILITIES_READ:
            values = transport.read_byte_vector(length, f"{name} payload")
        else:
            values = transport.read_uint32_vector(length, f"{name} payload")

        return values

    def write_parameter(self, index: int, raw: int):
        """
        Send one raw parameter value (command 3002).

        Args:
            index: Parameter slot
            raw: Unsigned 32-bit value as produced by a descriptor's encode()

        Raises:
            WritingNotAllowedError: If index or raw is outside the wire range
            NotConnectedError: If the session is not connected
            TransportError: On socket failure (the session is closed)
        """
        if not 0 <= index <= INT32_MAX:
            raise WritingNotAllowedError(
                f"parameter slot {index} outside [0, {INT32_MAX}]",
                payload={"slot": index},
            )
        if not 0 <= raw <= UINT32_MAX:
            raise WritingNotAllowedError(
                f"raw value {raw} for slot {index} outside [0, {UINT32_MAX}]",
                payload={"slot": index, "raw": raw},
            )

        transport = self._require_transport()
        value = WireEncoder.uint32_to_int32(raw)

        with _GLOBAL_LOCK:
            try:
                self._send(transport, PARAMETERS_WRITE, index, value)
            except TransportError as e:
                self._abort(f"ParametersWrite failed: {e}")
                raise

        self.logger.debug(f"ParametersWrite: slot {index} <- {raw}")

    def write(self, register_map: RegisterMap, index: int, value: Any) -> int:
        """
        Encode ``value`` through the slot's descriptor and send it.

        Returns:
            The raw value that was sent

        Raises:
            WritingNotAllowedError: If the slot is not in the map or the
                descriptor refuses the value
        """
        if index not in register_map:
            raise WritingNotAllowedError(
                f"slot {index} is not in the {register_map.bank or 'register'} map",
                payload={"slot": index},
            )

        raw = register_map[index].encode(value)
        self.write_parameter(index, raw)
        return raw
