"""
Tests for Session lifecycle, command framing and locking.

Run with: pytest tests/test_session.py -v
"""

import logging
import struct
import threading

import pytest

import luxtronik.protocol.session as session_module
from luxtronik.errors import (
    ConfigurationError,
    FramingError,
    LengthMismatchError,
    NotConnectedError,
    TransportError,
    WritingNotAllowedError,
)
from luxtronik.protocol import Session, SessionOptions, SessionState, split_host_port
from luxtronik.registers import RegisterMap, datatypes, new_parameter_map

from conftest import FakeSocket, words


def three_slot_map():
    return RegisterMap({i: datatypes.count(f"ID_{i}") for i in range(3)})


# ============================================================================
# Configuration
# ============================================================================


@pytest.mark.parametrize(
    "address,expected",
    [
        ("192.168.0.121:8889", ("192.168.0.121", "8889")),
        ("192.168.0.121", ("192.168.0.121", "8889")),
        ("heatpump.local:9000", ("heatpump.local", "9000")),
        ("[fe80::1]:8889", ("fe80::1", "8889")),
        ("[fe80::1]", ("fe80::1", "8889")),
    ],
)
def test_split_host_port(address, expected):
    assert split_host_port(address) == expected


@pytest.mark.parametrize(
    "address",
    ["", "   ", ":8889", "host:", "host:port", "host:70000", "fe80::1", "[fe80::1", "[::1]x"],
)
def test_malformed_address_is_configuration_error(address):
    with pytest.raises(ConfigurationError):
        Session(address)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        Session("a:b:c")


def test_default_options():
    session = Session("192.168.0.121")

    assert session.port == "8889"
    assert session.options.dial_timeout == 60.0
    assert session.options.safe_mode is True
    assert session.state == SessionState.UNCONNECTED
    assert session.logger is logging.getLogger("luxtronik.protocol.session")


def test_dial_timeout_below_one_second_falls_back():
    options = SessionOptions(dial_timeout=0)
    session = Session("192.168.0.121", options)

    assert session.options.dial_timeout == 60.0
    assert options.dial_timeout == 0


def test_custom_logger():
    logger = logging.getLogger("test.luxtronik")
    session = Session("192.168.0.121", SessionOptions(logger=logger))
    assert session.logger is logger


# ============================================================================
# Lifecycle
# ============================================================================


def test_connect_dials_and_calls_hook(dial):
    sock = FakeSocket()
    calls = dial(sock)
    hooked = []

    session = Session(
        "192.168.0.121:8889",
        SessionOptions(conn_callback=hooked.append, dial_timeout=5.0),
    )
    session.connect()

    assert calls == [(("192.168.0.121", 8889), 5.0)]
    assert hooked == [sock]
    assert sock.timeouts == [None]
    assert session.is_connected


def test_connect_reuses_connection(dial):
    calls = dial(FakeSocket())
    session = Session("192.168.0.121")

    session.connect()
    session.connect()

    assert len(calls) == 1


def test_connect_failure_is_transport_error(monkeypatch):
    def refuse(address, timeout=None):
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(session_module.socket, "create_connection", refuse)
    session = Session("192.168.0.121")

    with pytest.raises(TransportError) as excinfo:
        session.connect()

    assert "connect" in str(excinfo.value)
    assert session.state == SessionState.UNCONNECTED


def test_close_unconnected_is_noop():
    session = Session("192.168.0.121")
    session.close()
    assert session.state == SessionState.UNCONNECTED


def test_close_then_reconnect_is_refused(connected_session):
    session, sock = connected_session()
    session.close()

    assert sock.closed
    assert session.state == SessionState.CLOSED

    session.close()
    with pytest.raises(NotConnectedError):
        session.connect()


@pytest.mark.parametrize(
    "operation",
    [
        lambda s: s.read_parameters(three_slot_map()),
        lambda s: s.read_calculations(three_slot_map()),
        lambda s: s.read_visibilities(three_slot_map()),
        lambda s: s.write_parameter(2, 485),
    ],
)
def test_operations_require_connection(operation):
    with pytest.raises(NotConnectedError):
        operation(Session("192.168.0.121"))


def test_context_manager(dial):
    sock = FakeSocket()
    dial(sock)

    with Session("192.168.0.121") as session:
        assert session.is_connected

    assert sock.closed
    assert session.state == SessionState.CLOSED


# ============================================================================
# Read framing
# ============================================================================


def test_read_calculations(connected_session):
    session, sock = connected_session(words(3004, 0, 3, 10, 20, 30))
    reg_map = three_slot_map()

    session.read_calculations(reg_map)

    assert bytes(sock.sent) == struct.pack(">ii", 3004, 0)
    assert [reg.raw for _, reg in reg_map.items()] == [10, 20, 30]


def test_read_calculations_length_mismatch(connected_session):
    session, _ = connected_session(words(3004, 0, 4, 10, 20, 30, 40))
    reg_map = three_slot_map()

    with pytest.raises(LengthMismatchError):
        session.read_calculations(reg_map)

    assert [reg.raw for _, reg in reg_map.items()] == [0, 0, 0]


def test_read_parameters_has_no_status_word(connected_session):
    session, sock = connected_session(words(3003, 3, 1, 2, 3))
    reg_map = three_slot_map()

    session.read_parameters(reg_map)

    assert bytes(sock.sent) == struct.pack(">ii", 3003, 0)
    assert [reg.raw for _, reg in reg_map.items()] == [1, 2, 3]


def test_read_visibilities_one_byte_per_entry(connected_session):
    session, sock = connected_session(words(3005, 3) + b"\x01\x00\x01")
    reg_map = RegisterMap({i: datatypes.boolean(f"ID_Visi_{i}") for i in range(3)})

    session.read_visibilities(reg_map)

    assert bytes(sock.sent) == struct.pack(">ii", 3005, 0)
    assert [reg.decode() for _, reg in reg_map.items()] == [True, False, True]


def test_read_with_short_reads(connected_session):
    session, _ = connected_session(words(3004, 7, 3, 10, 20, 30), chunk=3)
    reg_map = three_slot_map()

    session.read_calculations(reg_map)

    assert [reg.raw for _, reg in reg_map.items()] == [10, 20, 30]


def test_invalid_command_echo(connected_session):
    session, _ = connected_session(words(3003, 0, 3, 1, 2, 3))

    with pytest.raises(FramingError) as excinfo:
        session.read_calculations(three_slot_map())

    assert "invalid command echoed" in str(excinfo.value)


def test_truncated_reply(connected_session):
    session, _ = connected_session(words(3003, 3, 1))

    with pytest.raises(FramingError):
        session.read_parameters(three_slot_map())


def test_implausible_length(connected_session):
    session, _ = connected_session(words(3003, 0xFFFFFFFF))

    with pytest.raises(FramingError):
        session.read_parameters(three_slot_map())


def test_read_transport_error(connected_session):
    session, _ = connected_session(recv_error=TimeoutError("timed out"))

    with pytest.raises(TransportError):
        session.read_parameters(three_slot_map())


@pytest.mark.parametrize(
    "reply",
    [
        words(3004, 3, 1, 2, 3),
        words(3003, 0xFFFFFFFF, 1, 2),
        words(3003, 3, 1),
    ],
)
def test_framing_error_closes_session(connected_session, reply):
    session, sock = connected_session(reply)

    with pytest.raises(FramingError):
        session.read_parameters(three_slot_map())

    assert session.state == SessionState.CLOSED
    assert sock.closed
    with pytest.raises(NotConnectedError):
        session.read_parameters(three_slot_map())


def test_transport_error_closes_session(connected_session):
    session, sock = connected_session(recv_error=TimeoutError("timed out"))

    with pytest.raises(TransportError):
        session.read_parameters(three_slot_map())

    assert session.state == SessionState.CLOSED
    assert sock.closed


def test_length_mismatch_keeps_session_open(connected_session):
    session, _ = connected_session(words(3003, 2, 1, 2))

    with pytest.raises(LengthMismatchError):
        session.read_parameters(three_slot_map())

    assert session.is_connected


def test_read_raw_rejects_write_command(connected_session):
    session, _ = connected_session()
    with pytest.raises(ValueError):
        session.read_raw(3002)


def test_exchange_holds_global_lock(connected_session):
    session, sock = connected_session(words(3004, 0, 3, 10, 20, 30))
    observed = []

    def try_lock_from_other_thread():
        def worker():
            acquired = session_module._GLOBAL_LOCK.acquire(blocking=False)
            if acquired:
                session_module._GLOBAL_LOCK.release()
            observed.append(acquired)

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

    sock.on_recv = try_lock_from_other_thread
    session.read_calculations(three_slot_map())

    assert observed and not any(observed)


# ============================================================================
# Writes
# ============================================================================


def test_write_parameter(connected_session):
    session, sock = connected_session()

    session.write_parameter(2, 485)

    assert bytes(sock.sent) == struct.pack(">iii", 3002, 2, 485)


def test_write_parameter_large_raw_is_sent_as_signed(connected_session):
    session, sock = connected_session()

    session.write_parameter(1, 0xFFFFFFFB)

    assert bytes(sock.sent) == struct.pack(">iii", 3002, 1, -5)


def test_write_encodes_through_descriptor(connected_session):
    session, sock = connected_session()
    parameters = new_parameter_map()

    raw = session.write(parameters, 2, 48.5)

    assert raw == 485
    assert bytes(sock.sent) == struct.pack(">iii", 3002, 2, 485)


def test_write_negative_temperature(connected_session):
    session, sock = connected_session()
    parameters = new_parameter_map()

    raw = session.write(parameters, 1, -1.5)

    assert raw == 2**32 - 15
    assert bytes(sock.sent) == struct.pack(">iii", 3002, 1, -15)


def test_write_not_allowed_sends_nothing(connected_session):
    session, sock = connected_session()
    parameters = new_parameter_map()

    with pytest.raises(WritingNotAllowedError):
        session.write(parameters, 0, 1)
    with pytest.raises(WritingNotAllowedError):
        session.write(parameters, 3, "Turbo")

    assert bytes(sock.sent) == b""


def test_write_unknown_slot_is_refused(connected_session):
    session, sock = connected_session()

    with pytest.raises(WritingNotAllowedError) as excinfo:
        session.write(three_slot_map(), 7, 1)

    assert excinfo.value.payload == {"slot": 7}
    assert bytes(sock.sent) == b""


@pytest.mark.parametrize("index,raw", [(-1, 1), (2**31, 1), (1, -1), (1, 2**32)])
def test_write_parameter_out_of_range_is_refused(connected_session, index, raw):
    session, sock = connected_session()

    with pytest.raises(WritingNotAllowedError):
        session.write_parameter(index, raw)

    assert bytes(sock.sent) == b""
    assert session.is_connected


def test_write_transport_error_closes_session(connected_session):
    session, sock = connected_session(send_error=BrokenPipeError("broken pipe"))

    with pytest.raises(TransportError):
        session.write_parameter(2, 485)

    assert session.state == SessionState.CLOSED
    assert sock.closed
