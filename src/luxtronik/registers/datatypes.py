"""
Register Data Types
===================

Constructors for every register family the controller exposes.

Each function returns a fresh RegisterDescriptor configured for one
family: scalars with a unit and factor, durations, timestamps, versions,
booleans, IPv4 addresses, firmware characters and enumerated modes.
The bank catalogues (parameters, calculations, visibilities) are built
exclusively from these constructors.

Families and their wire encoding:
- energy: kWh, raw * 0.1
- celsius / kelvin: signed raw * 0.1
- voltage: V, raw * 0.1
- pressure: bar, raw * 0.01
- hours: h, raw * 0.1
- hours2: h, 1 + raw / 2
- timestamp: Unix epoch seconds, rendered 'YYYY-MM-DD HH:MM:SS' (UTC)
- version: raw 304 -> '3.4'
- ipv4_address: raw 0xC0A80079 -> '192.168.0.121'

License: MIT
"""

import ipaddress
from datetime import datetime, timezone
from typing import Any

from ..errors import WritingNotAllowedError
from ..protocol.wire import UINT32_MAX
from . import codes as code_tables
from .descriptor import (
    RegisterClass,
    RegisterDescriptor,
    ReturnShape,
    to_number,
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


# ============================================================================
# Scalars with unit
# ============================================================================


def energy(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.ENERGY,
        shape=ReturnShape.REAL,
        kind="energy",
        unit="kWh",
        factor=0.1,
    )


def celsius(name: str, writeable: bool = False) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.TEMPERATURE,
        shape=ReturnShape.REAL,
        kind="celsius",
        unit="°C",
        writeable=writeable,
        factor=0.1,
        signed=True,
    )


def kelvin(name: str, writeable: bool = False) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.TEMPERATURE,
        shape=ReturnShape.REAL,
        kind="kelvin",
        unit="K",
        writeable=writeable,
        factor=0.1,
        signed=True,
    )


def voltage(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.VOLTAGE,
        shape=ReturnShape.REAL,
        kind="voltage",
        unit="V",
        factor=0.1,
    )


def flow(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.FLOW,
        shape=ReturnShape.REAL,
        kind="flow",
        unit="l/h",
    )


def pressure(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.PRESSURE,
        shape=ReturnShape.REAL,
        kind="pressure",
        unit="bar",
        factor=0.01,
    )


def frequency(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.FREQUENCY,
        shape=ReturnShape.REAL,
        kind="frequency",
        unit="Hz",
    )


def power(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.POWER,
        shape=ReturnShape.INTEGER,
        kind="power",
        unit="W",
    )


def speed(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.SPEED,
        shape=ReturnShape.INTEGER,
        kind="speed",
        unit="rpm",
    )


def percent(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.PERCENT,
        shape=ReturnShape.INTEGER,
        kind="percent",
        unit="%",
    )


def count(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.COUNT,
        shape=ReturnShape.INTEGER,
        kind="count",
    )


def pulses(name: str) -> RegisterDescriptor:
    """Flow-meter pulse counter."""
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.COUNT,
        shape=ReturnShape.INTEGER,
        kind="pulses",
    )


def level(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.COUNT,
        shape=ReturnShape.INTEGER,
        kind="level",
    )


def icon(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.ICON,
        shape=ReturnShape.INTEGER,
        kind="icon",
    )


def errorcode(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.VALUE,
        shape=ReturnShape.INTEGER,
        kind="errorcode",
    )


def unknown(name: str) -> RegisterDescriptor:
    """Slot without known semantics: raw integer, read-only."""
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.NONE,
        shape=ReturnShape.INTEGER,
        kind="none",
    )


# ============================================================================
# Durations
# ============================================================================


def seconds(name: str) -> RegisterDescriptor:
    """Decoded to datetime.timedelta."""
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.DURATION,
        shape=ReturnShape.INTEGER,
        kind="seconds",
        unit="s",
    )


def hours(name: str, writeable: bool = False) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.DURATION,
        shape=ReturnShape.REAL,
        kind="hours",
        unit="h",
        writeable=writeable,
        factor=0.1,
    )


def _hours2_decode(raw: int) -> int:
    return 1 + raw // 2


def _hours2_encode(value: Any) -> int:
    return (int(to_number(value)) - 1) * 2


def hours2(name: str, writeable: bool = False) -> RegisterDescriptor:
    """Half-hour steps offset by one hour: raw 10 -> 6 h."""
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.DURATION,
        shape=ReturnShape.INTEGER,
        kind="hours2",
        unit="h",
        writeable=writeable,
        decoder=_hours2_decode,
        encoder=_hours2_encode,
    )


def minutes(name: str, writeable: bool = False) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.DURATION,
        shape=ReturnShape.INTEGER,
        kind="minutes",
        unit="min",
        writeable=writeable,
    )


# ============================================================================
# Timestamps, versions, addresses, characters
# ============================================================================


def _timestamp_decode(raw: int) -> str:
    if raw < 1:
        return ""
    return datetime.fromtimestamp(raw, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)


def _timestamp_encode(value: Any) -> int:
    try:
        parsed = datetime.strptime(str(value), TIMESTAMP_FORMAT)
    except ValueError as e:
        raise WritingNotAllowedError(
            f"timestamp {value!r} does not match {TIMESTAMP_FORMAT!r}"
        ) from e

    epoch = int(parsed.replace(tzinfo=timezone.utc).timestamp())
    if not 0 <= epoch <= UINT32_MAX:
        raise WritingNotAllowedError(f"timestamp {value!r} out of range")
    return epoch


def timestamp(name: str, writeable: bool = False) -> RegisterDescriptor:
    """Unix epoch seconds, rendered as 'YYYY-MM-DD HH:MM:SS' in UTC."""
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.TIME,
        shape=ReturnShape.STRING,
        kind="time",
        unit="ts",
        writeable=writeable,
        decoder=_timestamp_decode,
        encoder=_timestamp_encode,
    )


def _version_decode(raw: int) -> str:
    if raw > 0:
        return f"{raw // 100}.{raw % 100}"
    return "0"


def _version_encode(value: Any) -> int:
    raise WritingNotAllowedError(f"version registers are read-only (value {value!r})")


def major_minor_version(name: str) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.VERSION,
        shape=ReturnShape.STRING,
        kind="major_minor_version",
        decoder=_version_decode,
        encoder=_version_encode,
    )


def _bool_decode(raw: int) -> bool:
    return raw == 1


def _bool_encode(value: Any) -> int:
    if isinstance(value, str):
        return 1 if value.strip().lower() in ("1", "true", "yes", "on") else 0
    return 1 if value else 0


def boolean(name: str, writeable: bool = False) -> RegisterDescriptor:
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.BOOLEAN,
        shape=ReturnShape.BOOLEAN,
        kind="bool",
        writeable=writeable,
        decoder=_bool_decode,
        encoder=_bool_encode,
    )


def _ipv4_decode(raw: int) -> str:
    return str(ipaddress.IPv4Address(raw))


def _ipv4_encode(value: Any) -> int:
    try:
        return int(ipaddress.IPv4Address(str(value)))
    except ValueError as e:
        raise WritingNotAllowedError(f"{value!r} is not a dotted-quad address") from e


def ipv4_address(name: str) -> RegisterDescriptor:
    """
    Four big-endian octets rendered as a dotted quad.

    Address registers are read-only; the encoder only parses the dotted
    quad for a descriptor explicitly marked writeable.
    """
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.STRING,
        shape=ReturnShape.STRING,
        kind="ipv4_address",
        decoder=_ipv4_decode,
        encoder=_ipv4_encode,
    )


def _character_decode(raw: int) -> str:
    if raw == 0:
        return ""
    if raw in code_tables.CHARACTER_TABLE:
        return code_tables.CHARACTER_TABLE[raw]
    return f"char {raw}:{raw:x} not found"


def character(name: str) -> RegisterDescriptor:
    """One character of the firmware version string."""
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.STRING,
        shape=ReturnShape.STRING,
        kind="character",
        decoder=_character_decode,
    )


# ============================================================================
# Enumerations
# ============================================================================


def _selection(name: str, kind: str, codes: dict, writeable: bool = False):
    # Copy so a descriptor never shares a mutable table
    return RegisterDescriptor(
        name=name,
        register_class=RegisterClass.SELECTION,
        shape=ReturnShape.STRING,
        kind=kind,
        writeable=writeable,
        codes=dict(codes),
    )


def heating_mode(name: str, writeable: bool = False) -> RegisterDescriptor:
    return _selection(name, "HeatingMode", code_tables.HEATING_MODE_CODES, writeable)


def hot_water_mode(name: str, writeable: bool = False) -> RegisterDescriptor:
    return _selection(name, "HotWaterMode", code_tables.HEATING_MODE_CODES, writeable)


def pool_mode(name: str, writeable: bool = False) -> RegisterDescriptor:
    return _selection(name, "PoolMode", code_tables.POOL_MODE_CODES, writeable)


def cooling_mode(name: str, writeable: bool = False) -> RegisterDescriptor:
    return _selection(name, "CoolingMode", code_tables.COOLING_MODE_CODES, writeable)


def solar_mode(name: str, writeable: bool = False) -> RegisterDescriptor:
    return _selection(name, "SolarMode", code_tables.COOLING_MODE_CODES, writeable)


def ventilation_mode(name: str, writeable: bool = False) -> RegisterDescriptor:
    return _selection(
        name, "VentilationMode", code_tables.VENTILATION_MODE_CODES, writeable
    )


def mixed_circuit_mode(name: str, writeable: bool = False) -> RegisterDescriptor:
    return _selection(
        name, "MixedCircuitMode", code_tables.MIXED_CIRCUIT_MODE_CODES, writeable
    )


def access_level(name: str, writeable: bool = False) -> RegisterDescriptor:
    return _selection(name, "AccessLevel", code_tables.ACCESS_LEVEL_CODES, writeable)


def bivalence_level(name: str) -> RegisterDescriptor:
    return _selection(name, "BivalenceLevel", code_tables.BIVALENCE_LEVEL_CODES)


def operation_mode(name: str) -> RegisterDescriptor:
    return _selection(name, "OperationMode", code_tables.OPERATION_MODE_CODES)


def sec_operation_mode(name: str) -> RegisterDescriptor:
    return _selection(name, "SecOperationMode", code_tables.SEC_OPERATION_MODE_CODES)


def heatpump_code(name: str) -> RegisterDescriptor:
    return _selection(name, "HeatpumpCode", code_tables.HEATPUMP_CODES)


def switchoff_file(name: str) -> RegisterDescriptor:
    return _selection(name, "SwitchoffFile", code_tables.SWITCHOFF_FILE_CODES)


def main_menu_status_line1(name: str) -> RegisterDescriptor:
    return _selection(
        name, "MainMenuStatusLine1", code_tables.MAIN_MENU_STATUS_LINE1_CODES
    )


def main_menu_status_line2(name: str) -> RegisterDescriptor:
    return _selection(
        name, "MainMenuStatusLine2", code_tables.MAIN_MENU_STATUS_LINE2_CODES
    )


def main_menu_status_line3(name: str) -> RegisterDescriptor:
    return _selection(
        name, "MainMenuStatusLine3", code_tables.MAIN_MENU_STATUS_LINE3_CODES
    )
