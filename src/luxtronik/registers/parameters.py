"""
Parameters Catalogue
====================

Controller configuration values (read: command 3003, write: 3002).

Only the slots listed here are writeable; every other parameter slot is
exposed as a read-only 'unknown' descriptor.

License: MIT
"""

from typing import Dict, Optional

from .datatypes import (
    boolean,
    celsius,
    cooling_mode,
    heating_mode,
    hot_water_mode,
    kelvin,
    unknown,
    ventilation_mode,
)
from .descriptor import RegisterDescriptor
from .register_map import RegisterMap, build_register_map

PARAMETERS_SIZE = 1126


def parameters_catalogue() -> Dict[int, RegisterDescriptor]:
    """Fresh descriptors for every named parameter slot."""
    return {
        0: unknown("ID_Transfert_LuxNet"),
        1: celsius("ID_Einst_WK_akt", writeable=True),
        2: celsius("ID_Einst_BWS_akt", writeable=True),
        3: heating_mode("ID_Ba_Hz_akt", writeable=True),
        4: hot_water_mode("ID_Ba_Bw_akt", writeable=True),
        5: heating_mode("ID_Ba_Al_akt"),
        6: unknown("ID_SU_FrkdHz"),
        7: unknown("ID_SU_FrkdBw"),
        8: unknown("ID_SU_FrkdAl"),
        9: unknown("ID_Einst_HReg_akt"),
        10: celsius("ID_Einst_HzHwMAt_akt"),
        11: celsius("ID_Einst_HzHwHKE_akt", writeable=True),
        12: celsius("ID_Einst_HzHKRANH_akt", writeable=True),
        13: celsius("ID_Einst_HzHKRABS_akt", writeable=True),
        14: celsius("ID_Einst_HzMK1E_akt", writeable=True),
        15: celsius("ID_Einst_HzMK1ANH_akt", writeable=True),
        16: celsius("ID_Einst_HzMK1ABS_akt", writeable=True),
        17: celsius("ID_Einst_HzFtRl_akt", writeable=True),
        18: celsius("ID_Einst_HzFtMK1Vl_akt", writeable=True),
        74: kelvin("ID_Einst_BWS_Hyst_akt", writeable=True),
        88: kelvin("ID_Einst_HRHyst_akt", writeable=True),
        105: celsius("ID_Soll_BWS_akt", writeable=True),
        108: cooling_mode("ID_Einst_BA_Kuehl_akt", writeable=True),
        110: celsius("ID_Einst_KuehlFreig_akt", writeable=True),
        699: boolean("ID_Einst_Heizgrenze", writeable=True),
        700: celsius("ID_Einst_Heizgrenze_Temp", writeable=True),
        894: ventilation_mode("ID_Einst_BA_Lueftung_akt", writeable=True),
    }


def new_parameter_map(size: Optional[int] = PARAMETERS_SIZE) -> RegisterMap:
    """
    Create an empty parameters map.

    Args:
        size: Number of slots the controller reports

    Returns:
        RegisterMap with all raw values 0
    """
    return build_register_map(
        parameters_catalogue(), bank="parameters", label="Parameter", size=size
    )
