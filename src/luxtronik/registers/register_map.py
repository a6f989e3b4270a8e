"""
Luxtronik Register Map
======================

Ordered collection of register descriptors for one bank.

A map is keyed by the controller's slot number and is dense from 0 to
N-1. It is created once by a bank factory and afterwards mutated only by
bulk-assigning a freshly read raw vector; descriptors are never recreated,
so previous raw values survive between reads for change detection.

Banks:
- parameters: read/write configuration
- calculations: read-only measured and derived values
- visibilities: read-only menu visibility flags

License: MIT
"""

from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import LengthMismatchError
from ..protocol.wire import UINT32_MAX
from .datatypes import unknown
from .descriptor import RegisterDescriptor

VERSION_FIRST_SLOT = 81
VERSION_LAST_SLOT = 87


class RegisterMap:
    """
    Dense slot index -> RegisterDescriptor mapping for one bank.

    This class holds register state but does NOT:
    - Talk to the controller (that's done by the session)
    - Decide what to write
    """

    def __init__(self, registers: Dict[int, RegisterDescriptor], bank: str = ""):
        """
        Initialize map from a complete slot table.

        Args:
            registers: Descriptor per slot, keys must be exactly 0..N-1
            bank: Bank name used in messages ('parameters', ...)

        Raises:
            ValueError: If the slot table is not dense
        """
        self.bank = bank
        self._registers: Dict[int, RegisterDescriptor] = dict(registers)

        self._validate_all()

    def _validate_all(self):
        """Check the map is dense and every descriptor is unique."""
        expected = set(range(len(self._registers)))
        keys = set(self._registers)
        if keys != expected:
            missing = sorted(expected - keys)[:5]
            extra = sorted(keys - expected)[:5]
            raise ValueError(
                f"{self.bank or 'register'} map is not dense: "
                f"missing slots {missing}, unexpected slots {extra}"
            )

        seen = {}
        for index, reg in self._registers.items():
            other = seen.setdefault(id(reg), index)
            if other != index:
                raise ValueError(
                    f"slots {other} and {index} share the descriptor {reg.name}"
                )

    def __len__(self) -> int:
        return len(self._registers)

    def __getitem__(self, index: int) -> RegisterDescriptor:
        return self._registers[index]

    def __contains__(self, index: object) -> bool:
        return index in self._registers

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._registers))

    def items(self) -> List[Tuple[int, RegisterDescriptor]]:
        """Slots and descriptors in ascending slot order."""
        return [(index, self._registers[index]) for index in sorted(self._registers)]

    def iterate_sorted(self, callback: Callable[[int, RegisterDescriptor], None]):
        """Call ``callback(index, descriptor)`` for every slot in ascending order."""
        for index, reg in self.items():
            callback(index, reg)

    def set_raw_values(self, values: Sequence[int]):
        """
        Assign a freshly read raw vector, one word per slot.

        The vector is validated completely before any descriptor is touched.

        Args:
            values: Raw words, length must equal len(self)

        Raises:
            LengthMismatchError: If the vector length differs from the map size
            ValueError: If a word is outside the unsigned 32-bit range
        """
        if len(values) != len(self._registers):
            raise LengthMismatchError(
                f"{self.bank or 'register'} map: length of data {len(values)} "
                f"not equal to map size {len(self._registers)}",
                payload={"received": len(values), "expected": len(self._registers)},
            )

        words = [int(v) for v in values]
        for index, word in enumerate(words):
            if not 0 <= word <= UINT32_MAX:
                raise ValueError(f"raw value {word} at slot {index} out of range")

        for index, word in enumerate(words):
            self._registers[index].set_raw(word)

    def raw_values(self) -> np.ndarray:
        """Current raw words as a uint32 array in slot order."""
        return np.array([reg.raw for _, reg in self.items()], dtype=np.uint32)

    def changed(self) -> List[Tuple[int, RegisterDescriptor]]:
        """Slots whose raw word changed on the last bulk assignment."""
        return [(index, reg) for index, reg in self.items() if reg.has_changes()]

    def get_register_by_name(self, name: str) -> Optional[RegisterDescriptor]:
        """
        Find descriptor by controller-side name.

        Returns:
            RegisterDescriptor if found, None otherwise
        """
        for reg in self._registers.values():
            if reg.name == name:
                return reg

        return None

    @property
    def version(self) -> str:
        """Firmware version assembled from the character slots 81..87."""
        return "".join(
            str(self._registers[i].decode())
            for i in range(VERSION_FIRST_SLOT, VERSION_LAST_SLOT + 1)
        )

    def format_table(self, only_nonzero: bool = True, only_changed: bool = False) -> str:
        """
        Render the map as a text table.

        Args:
            only_nonzero: Skip slots whose raw word is 0
            only_changed: Skip slots without changes since the previous read
        """
        lines = [
            f"{'Number':<8} {'Name':<45} {'Type':<12} {'Value':<30} {'Unit':<6}",
            "-" * 105,
        ]
        for index, reg in self.items():
            if only_nonzero and reg.raw == 0:
                continue
            if only_changed and not reg.has_changes():
                continue

            lines.append(
                f"{index:<8} {reg.name:<45} {reg.register_class.value:<12} "
                f"{format_value(reg.decode()):<30} {reg.unit:<6}"
            )

        return "\n".join(lines)

    def print_register_map(self, only_nonzero: bool = True, only_changed: bool = False):
        """Print the map for inspection."""
        print("=" * 105)
        print(f"LUXTRONIK {self.bank.upper()}".rstrip())
        print("=" * 105)
        print(self.format_table(only_nonzero=only_nonzero, only_changed=only_changed))


def format_value(value) -> str:
    """Display form of a decoded value (floats with 3 decimals)."""
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def build_register_map(
    catalogue: Dict[int, RegisterDescriptor],
    bank: str,
    label: str,
    size: Optional[int] = None,
) -> RegisterMap:
    """
    Create a dense map from a (possibly sparse) slot catalogue.

    Slots the catalogue does not name, up to ``size``, get a read-only
    'unknown' descriptor named 'Unknown_<label>_<index>'.

    Args:
        catalogue: Named descriptors per slot
        bank: Bank name
        label: Singular bank label for unnamed slots (e.g. 'Calculation')
        size: Number of slots the controller reports (default: catalogue extent)

    Raises:
        ValueError: If size is smaller than the catalogue extent
    """
    extent = max(catalogue, default=-1) + 1
    if size is None:
        size = extent
    if size < extent:
        raise ValueError(
            f"{bank} map size {size} smaller than catalogue extent {extent}"
        )

    registers = {}
    for index in range(size):
        if index in catalogue:
            registers[index] = catalogue[index]
        else:
            registers[index] = unknown(f"Unknown_{label}_{index}")
    return RegisterMap(registers, bank=bank)
