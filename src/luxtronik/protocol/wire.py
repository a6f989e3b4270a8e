"""
Luxtronik Wire Codec
====================

Fixed-endian conversion between Python integers and the controller's
byte stream.

This module handles ONLY data format conversion on a stream transport:
- Exact-size reads with retry on short reads
- Unsigned 32-bit words and single bytes (reads)
- Signed 32-bit request words (writes)

No command logic, no locking, no register semantics.

Byte Order: Big-endian (network byte order) for every word.

License: MIT
"""

import struct
from typing import List, Sequence

import numpy as np

from ..errors import FramingError, TransportError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1

SIZE_INTEGER = 4
SIZE_CHAR = 1

MAX_CHUNK = 65536


class WireEncoder:
    """
    Encoder for converting Python integers to controller request words.

    Requests are contiguous signed 32-bit big-endian integers.
    """

    @staticmethod
    def uint32_to_int32(value: int) -> int:
        """
        Reinterpret an unsigned 32-bit value as signed (two's complement).

        Args:
            value: Integer in range [0, 2**32 - 1]

        Returns:
            Signed integer in range [-2**31, 2**31 - 1]

        Raises:
            ValueError: If value out of range
        """
        if not 0 <= value <= UINT32_MAX:
            raise ValueError(f"uint32 value {value} out of range [0, {UINT32_MAX}]")

        (result,) = struct.unpack(">i", struct.pack(">I", value))
        return result

    @staticmethod
    def int32_words_to_bytes(values: Sequence[int]) -> bytes:
        """
        Pack signed 32-bit integers into one contiguous big-endian buffer.

        Args:
            values: Signed integers in range [-2**31, 2**31 - 1]

        Returns:
            Packed request buffer (4 bytes per value)

        Raises:
            ValueError: If any value is out of range
        """
        words = [int(v) for v in values]
        for word in words:
            if not INT32_MIN <= word <= INT32_MAX:
                raise ValueError(
                    f"int32 value {word} out of range [{INT32_MIN}, {INT32_MAX}]"
                )

        return np.asarray(words, dtype=">i4").tobytes()


class WireDecoder:
    """
    Decoder for converting reply buffers to Python integers.

    Performs the inverse byte-level operations of WireEncoder.
    """

    @staticmethod
    def bytes_to_uint32(buf: bytes) -> int:
        """Unpack one big-endian unsigned 32-bit word."""
        (result,) = struct.unpack(">I", buf)
        return result

    @staticmethod
    def bytes_to_uint32_vector(buf: bytes) -> List[int]:
        """
        Unpack a buffer of consecutive big-endian unsigned 32-bit words.

        Args:
            buf: Buffer whose length is a multiple of 4

        Returns:
            List of unsigned integers
        """
        if len(buf) % SIZE_INTEGER:
            raise ValueError(f"buffer length {len(buf)} is not a multiple of 4")

        return np.frombuffer(buf, dtype=">u4").astype(np.uint32).tolist()

    @staticmethod
    def bytes_to_byte_vector(buf: bytes) -> List[int]:
        """Unpack a buffer of single bytes widened to integers."""
        return np.frombuffer(buf, dtype=np.uint8).astype(np.uint32).tolist()


class WireTransport:
    """
    Blocking reader/writer over a stream-oriented socket.

    The wrapped object needs ``recv(n)`` and ``sendall(buf)``, which makes
    a plain ``socket.socket`` or any test double suitable. Any OSError from
    the socket is surfaced as TransportError naming the failed operation.
    """

    def __init__(self, conn):
        self.conn = conn
        self.encoder = WireEncoder()
        self.decoder = WireDecoder()

    def read_exact(self, size: int, operation: str = "read") -> bytes:
        """
        Read exactly ``size`` bytes, looping over short reads.

        Raises:
            TransportError: If the socket raises
            FramingError: If the peer closes before ``size`` bytes arrived
        """
        chunks = []
        received = 0

        while received < size:
            try:
                chunk = self.conn.recv(min(size - received, MAX_CHUNK))
            except OSError as e:
                raise TransportError(
                    f"{operation} failed after {received}/{size} bytes: {e}",
                    payload={"operation": operation, "received": received},
                ) from e

            if not chunk:
                raise FramingError(
                    f"{operation}: connection closed after {received}/{size} bytes",
                    payload={"operation": operation, "received": received},
                )

            chunks.append(chunk)
            received += len(chunk)

        return b"".join(chunks)

    def read_uint32(self, operation: str = "read uint32") -> int:
        """Read one unsigned 32-bit word in network byte order."""
        return self.decoder.bytes_to_uint32(self.read_exact(SIZE_INTEGER, operation))

    def read_byte(self, operation: str = "read byte") -> int:
        """Read one byte."""
        return self.read_exact(SIZE_CHAR, operation)[0]

    def read_uint32_vector(self, count: int, operation: str = "read payload") -> List[int]:
        """Read ``count`` consecutive unsigned 32-bit words."""
        buf = self.read_exact(count * SIZE_INTEGER, operation)
        return self.decoder.bytes_to_uint32_vector(buf)

    def read_byte_vector(self, count: int, operation: str = "read payload") -> List[int]:
        """Read ``count`` single bytes, each widened to an integer."""
        return self.decoder.bytes_to_byte_vector(self.read_exact(count, operation))

    def write_int32s(self, values: Sequence[int], operation: str = "write") -> int:
        """
        Send signed 32-bit words as one contiguous buffer.

        Returns:
            Number of bytes sent
        """
        buf = self.encoder.int32_words_to_bytes(values)
        try:
            self.conn.sendall(buf)
        except OSError as e:
            raise TransportError(
                f"{operation} failed: {e}", payload={"operation": operation}
            ) from e

        return len(buf)
