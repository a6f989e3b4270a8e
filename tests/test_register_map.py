"""
Tests for RegisterMap bulk assignment, ordering and aggregates.

Run with: pytest tests/test_register_map.py -v
"""

import numpy as np
import pytest

from luxtronik.errors import FramingError, LengthMismatchError
from luxtronik.registers import datatypes
from luxtronik.registers.calculations import new_calculations_map
from luxtronik.registers.register_map import RegisterMap, build_register_map


def small_map():
    return RegisterMap(
        {
            2: datatypes.count("ID_C"),
            0: datatypes.celsius("ID_A"),
            1: datatypes.boolean("ID_B"),
        },
        bank="test",
    )


def test_map_must_be_dense():
    with pytest.raises(ValueError):
        RegisterMap({0: datatypes.count("a"), 2: datatypes.count("c")})


def test_map_rejects_shared_descriptor():
    shared = datatypes.count("a")
    with pytest.raises(ValueError):
        RegisterMap({0: shared, 1: shared})


def test_set_raw_values():
    reg_map = small_map()
    reg_map.set_raw_values([215, 1, 7])

    assert reg_map[0].decode() == 21.5
    assert reg_map[1].decode() is True
    assert reg_map[2].decode() == 7


def test_set_raw_values_accepts_numpy():
    reg_map = small_map()
    reg_map.set_raw_values(np.array([1, 2, 3], dtype=np.uint32))

    assert [reg.raw for _, reg in reg_map.items()] == [1, 2, 3]


@pytest.mark.parametrize("values", [[], [1, 2], [1, 2, 3, 4]])
def test_length_mismatch_leaves_map_untouched(values):
    reg_map = small_map()
    reg_map.set_raw_values([5, 6, 7])

    with pytest.raises(LengthMismatchError) as excinfo:
        reg_map.set_raw_values(values)

    assert isinstance(excinfo.value, FramingError)
    assert [reg.raw for _, reg in reg_map.items()] == [5, 6, 7]
    assert [reg.previous_raw for _, reg in reg_map.items()] == [0, 0, 0]


def test_out_of_range_word_leaves_map_untouched():
    reg_map = small_map()
    with pytest.raises(ValueError):
        reg_map.set_raw_values([1, 2, 2**32])

    assert [reg.raw for _, reg in reg_map.items()] == [0, 0, 0]


def test_iterate_sorted_visits_ascending_keys():
    reg_map = small_map()
    visited = []
    reg_map.iterate_sorted(lambda index, reg: visited.append((index, reg.name)))

    assert visited == [(0, "ID_A"), (1, "ID_B"), (2, "ID_C")]
    assert list(reg_map) == [0, 1, 2]


def test_changed():
    reg_map = small_map()
    reg_map.set_raw_values([215, 0, 7])
    reg_map.set_raw_values([215, 1, 8])

    assert [index for index, _ in reg_map.changed()] == [1, 2]


def test_get_register_by_name():
    reg_map = small_map()
    assert reg_map.get_register_by_name("ID_B") is reg_map[1]
    assert reg_map.get_register_by_name("missing") is None


def test_raw_values_array():
    reg_map = small_map()
    reg_map.set_raw_values([0xFFFFFFFF, 1, 2])

    raw = reg_map.raw_values()
    assert raw.dtype == np.uint32
    assert raw.tolist() == [0xFFFFFFFF, 1, 2]


def test_version_aggregate():
    calculations = new_calculations_map()
    raw = [0] * len(calculations)
    for slot, char in zip(range(81, 88), "1.23.45"):
        raw[slot] = ord(char)
    calculations.set_raw_values(raw)

    assert calculations.version == "1.23.45"


def test_version_with_trailing_empty_slots():
    calculations = new_calculations_map()
    raw = [0] * len(calculations)
    for slot, char in zip(range(81, 88), "V3.88"):
        raw[slot] = ord(char)
    calculations.set_raw_values(raw)

    assert calculations.version == "V3.88"


def test_format_table():
    reg_map = small_map()
    reg_map.set_raw_values([215, 0, 7])

    table = reg_map.format_table()
    assert "ID_A" in table and "21.500" in table and "°C" in table
    assert "ID_B" not in table

    assert "ID_B" in reg_map.format_table(only_nonzero=False)

    reg_map.set_raw_values([215, 0, 8])
    changed = reg_map.format_table(only_changed=True)
    assert "ID_C" in changed and "ID_A" not in changed


def test_print_register_map(capsys):
    reg_map = small_map()
    reg_map.set_raw_values([215, 1, 7])
    reg_map.print_register_map()

    out = capsys.readouterr().out
    assert "LUXTRONIK TEST" in out
    assert "ID_C" in out


def test_build_register_map_fills_unknown_slots():
    reg_map = build_register_map(
        {1: datatypes.celsius("ID_A")}, bank="parameters", label="Parameter", size=4
    )

    assert len(reg_map) == 4
    assert reg_map[0].name == "Unknown_Parameter_0"
    assert reg_map[1].name == "ID_A"
    assert reg_map[3].name == "Unknown_Parameter_3"
    assert not reg_map[3].writeable


def test_build_register_map_size_too_small():
    with pytest.raises(ValueError):
        build_register_map(
            {5: datatypes.count("x")}, bank="parameters", label="Parameter", size=3
        )
