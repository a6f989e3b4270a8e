"""
Shared fixtures: a scripted in-memory socket and a connected session.
"""

import struct

import pytest

import luxtronik.protocol.session as session_module
from luxtronik.protocol import Session


def words(*values):
    """Big-endian unsigned 32-bit words."""
    return struct.pack(f">{len(values)}I", *values)


class FakeSocket:
    """Socket double that replays a fixed reply and records what is sent."""

    def __init__(self, reply=b"", chunk=None, recv_error=None, send_error=None):
        self.reply = bytearray(reply)
        self.chunk = chunk
        self.recv_error = recv_error
        self.send_error = send_error
        self.sent = bytearray()
        self.recv_sizes = []
        self.timeouts = []
        self.closed = False
        self.on_recv = None

    def recv(self, size):
        if self.on_recv is not None:
            self.on_recv()
        if self.recv_error is not None:
            raise self.recv_error
        self.recv_sizes.append(size)
        n = min(size, len(self.reply))
        if self.chunk is not None:
            n = min(n, self.chunk)
        data = bytes(self.reply[:n])
        del self.reply[:n]
        return data

    def sendall(self, data):
        if self.send_error is not None:
            raise self.send_error
        self.sent.extend(data)

    def settimeout(self, value):
        self.timeouts.append(value)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_socket():
    return FakeSocket()


@pytest.fixture
def dial(monkeypatch):
    """Route socket.create_connection to a FakeSocket; returns the call log."""
    calls = []

    def install(sock):
        def fake_create_connection(address, timeout=None):
            calls.append((address, timeout))
            return sock

        monkeypatch.setattr(
            session_module.socket, "create_connection", fake_create_connection
        )
        return calls

    return install


@pytest.fixture
def connected_session(dial):
    """Factory: session connected to a FakeSocket replaying ``reply``."""

    def make(reply=b"", **kwargs):
        sock = FakeSocket(reply, **kwargs)
        dial(sock)
        session = Session("192.168.0.121:8889")
        session.connect()
        return session, sock

    return make
