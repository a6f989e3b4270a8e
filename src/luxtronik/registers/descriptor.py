"""
Register Descriptor and Typed Codec
===================================

Typed view over one controller register slot.

Every slot on the wire is an unsigned 32-bit integer. A descriptor knows
how to present that raw word as a typed, unit-bearing value (decode) and
how to turn a typed value back into the raw word to send (encode).

Decode rules (first match wins):
1. Code table: raw -> enumerated display string
2. Custom decoder
3. Duration in seconds -> datetime.timedelta
4. Return shape: integer / real, with optional linear factor

Encode rules:
1. Non-writeable descriptors always refuse
2. Code table: display string -> index
3. Custom encoder
4. Return shape: value / factor, or value unscaled when factor is 0
5. The result must fit the register: [0, 2**32 - 1], or [-2**31, 2**31 - 1]
   for signed registers (negatives sent as two's complement)

Change Detection:
- set_raw() shifts the current raw word into previous_raw
- has_changes() compares both words

License: MIT
"""

import math
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..errors import WritingNotAllowedError
from ..protocol.wire import INT32_MIN, INT32_MAX, UINT32_MAX, WireEncoder


class RegisterClass(Enum):
    """Semantic class of a register, used for display and branching."""

    ENERGY = "energy"
    TEMPERATURE = "temperature"
    VOLTAGE = "voltage"
    FLOW = "flow"
    PRESSURE = "pressure"
    FREQUENCY = "frequency"
    POWER = "power"
    PERCENT = "percent"
    SPEED = "speed"
    COUNT = "count"
    DURATION = "duration"
    TIME = "time"
    VERSION = "version"
    SELECTION = "selection"
    BOOLEAN = "boolean"
    ICON = "icon"
    STRING = "string"
    VALUE = "value"
    NONE = "none"


class ReturnShape(Enum):
    """External Python type produced by decode()."""

    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"
    STRING = "string"


def to_number(value: Any) -> float:
    """
    Convert a caller-supplied value to a float for scalar encoding.

    Accepts ints, floats, bools, numeric strings and timedeltas.

    Raises:
        WritingNotAllowedError: If the value is not a finite number
    """
    if isinstance(value, timedelta):
        return value.total_seconds()

    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise WritingNotAllowedError(f"value {value!r} is not numeric") from e

    if not math.isfinite(number):
        raise WritingNotAllowedError(f"value {value!r} is not a finite number")
    return number


@dataclass
class RegisterDescriptor:
    """
    Definition and current state of a single controller register.

    Attributes:
        name: Controller-side identifier (e.g. 'ID_WEB_Temperatur_TVL')
        register_class: Semantic class
        shape: Python type produced by decode()
        kind: Internal family tag (e.g. 'celsius', 'seconds', 'hours2')
        unit: Display unit, may be empty
        writeable: Whether encode() may produce a value
        factor: Linear scaling, 0 means no scaling
        signed: Interpret raw word as two's complement before scaling
        codes: Sparse mapping raw -> display string for enumerations
        decoder: Custom raw -> typed conversion
        encoder: Custom typed -> raw conversion
    """

    name: str
    register_class: RegisterClass
    shape: ReturnShape
    kind: str
    unit: str = ""
    writeable: bool = False
    factor: float = 0.0
    signed: bool = False
    codes: Optional[Dict[int, str]] = None
    decoder: Optional[Callable[[int], Any]] = None
    encoder: Optional[Callable[[Any], int]] = None

    _raw: int = field(default=0, init=False, repr=False)
    _previous_raw: int = field(default=0, init=False, repr=False)

    def __post_init__(self):
        """Validate descriptor definition."""
        if self.codes is not None and (
            self.decoder is not None or self.encoder is not None
        ):
            raise ValueError(
                f"Register {self.name} defines codes and a custom decoder/encoder"
            )

        if self.factor < 0:
            raise ValueError(f"Register {self.name} has negative factor {self.factor}")

    def __str__(self) -> str:
        return (
            f'class:"{self.register_class.value}" name:"{self.name}" '
            f'unit:"{self.unit}" writeable:{str(self.writeable).lower()}'
        )

    @property
    def raw(self) -> int:
        """Raw word from the most recent read."""
        return self._raw

    @property
    def previous_raw(self) -> int:
        """Raw word from the read before the most recent one."""
        return self._previous_raw

    @property
    def value(self) -> Any:
        """Decoded value of the current raw word."""
        return self.decode()

    def set_raw(self, value: int):
        """
        Store a new raw word and keep the prior one for change detection.

        Raises:
            ValueError: If value is not a valid unsigned 32-bit integer
        """
        value = int(value)
        if not 0 <= value <= UINT32_MAX:
            raise ValueError(f"raw value {value} out of range [0, {UINT32_MAX}]")

        self._previous_raw = self._raw
        self._raw = value

    def has_changes(self) -> bool:
        """True if the last set_raw() changed the raw word."""
        return self._previous_raw != self._raw

    def decode(self) -> Any:
        """
        Convert the current raw word into its typed value.

        Returns:
            str, int, float, bool or datetime.timedelta depending on family
        """
        raw = self._raw

        if self.codes is not None:
            if raw in self.codes:
                return self.codes[raw]
            return f"unknown code: {raw}"

        if self.decoder is not None:
            return self.decoder(raw)

        if self.register_class == RegisterClass.DURATION and self.kind == "seconds":
            return timedelta(seconds=raw)

        number = WireEncoder.uint32_to_int32(raw) if self.signed else raw

        if self.shape == ReturnShape.INTEGER:
            if self.factor != 0:
                return int(number * self.factor) & UINT32_MAX
            return number

        if self.shape == ReturnShape.REAL:
            if self.factor != 0:
                return round(number * self.factor, 3)
            return float(number)

        return raw

    def encode(self, value: Any) -> int:
        """
        Convert a typed value into the raw word to send to the controller.

        Args:
            value: Typed value as produced by decode()

        Returns:
            Unsigned 32-bit raw word

        Raises:
            WritingNotAllowedError: If the register is read-only, the value
                is not a known code, or the family forbids writing
        """
        if not self.writeable:
            raise WritingNotAllowedError(
                f"Register {self.name} is not writeable (value {value!r})",
                payload={"register": self.name},
            )

        if self.codes is not None:
            text = str(value)
            for index in sorted(self.codes):
                if self.codes[index] == text:
                    return index
            raise WritingNotAllowedError(
                f"Register {self.name}: value {text!r} not in codes",
                payload={"register": self.name},
            )

        if self.encoder is not None:
            return self._to_word(self.encoder(value))

        if self.shape not in (ReturnShape.INTEGER, ReturnShape.REAL):
            raise WritingNotAllowedError(
                f"Register {self.name}: no encoding for {self.shape.value} values"
            )

        number = to_number(value)
        if self.factor != 0:
            # Nearest step so that 21.5 / 0.1 maps to 215, not 214
            return self._to_word(round(number / self.factor))
        return self._to_word(int(number))

    def _to_word(self, value: int) -> int:
        """
        Range-check an encoded integer and return it as an unsigned raw word.

        Raises:
            WritingNotAllowedError: If the value does not fit the register
        """
        value = int(value)
        if self.signed:
            if not INT32_MIN <= value <= INT32_MAX:
                raise WritingNotAllowedError(
                    f"Register {self.name}: value {value} outside signed 32-bit range",
                    payload={"register": self.name, "value": value},
                )
            return value & UINT32_MAX

        if not 0 <= value <= UINT32_MAX:
            raise WritingNotAllowedError(
                f"Register {self.name}: value {value} outside [0, {UINT32_MAX}]",
                payload={"register": self.name, "value": value},
            )
        return value
