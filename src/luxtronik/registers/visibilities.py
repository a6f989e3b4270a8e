"""
Visibilities Catalogue
======================

Menu visibility flags (command 3005). The controller sends one byte per
slot; each is decoded as a read-only boolean.

License: MIT
"""

from typing import Dict, Optional

from .datatypes import boolean
from .descriptor import RegisterDescriptor
from .register_map import RegisterMap, build_register_map

VISIBILITIES_SIZE = 355

_NAMES = [
    "ID_Visi_NieAnzeigen",
    "ID_Visi_ImmerAnzeigen",
    "ID_Visi_Heizung",
    "ID_Visi_Brauwasser",
    "ID_Visi_Schwimmbad",
    "ID_Visi_Kuhlung",
    "ID_Visi_Lueftung",
    "ID_Visi_MK1",
    "ID_Visi_MK2",
    "ID_Visi_ThermDesinfekt",
    "ID_Visi_Zirkulation",
    "ID_Visi_KuhlTemp_SolltempMK1",
    "ID_Visi_KuhlTemp_SolltempMK2",
    "ID_Visi_KuhlTemp_ATDiffMK1",
    "ID_Visi_KuhlTemp_ATDiffMK2",
    "ID_Visi_Service_Information",
    "ID_Visi_Service_Einstellung",
    "ID_Visi_Service_Sprache",
    "ID_Visi_Service_DatumUhrzeit",
    "ID_Visi_Service_Ausheiz",
    "ID_Visi_Service_Anlagenkonfiguration",
    "ID_Visi_Service_IBNAssistant",
    "ID_Visi_Service_ParameterIBNZuruck",
    "ID_Visi_Temp_Vorlauf",
    "ID_Visi_Temp_Rucklauf",
    "ID_Visi_Temp_RL_Soll",
    "ID_Visi_Temp_Ruecklext",
    "ID_Visi_Temp_Heissgas",
    "ID_Visi_Temp_Aussent",
    "ID_Visi_Temp_BW_Ist",
    "ID_Visi_Temp_BW_Soll",
    "ID_Visi_Temp_WQ_Ein",
    "ID_Visi_Temp_Kaeltekreis",
    "ID_Visi_Temp_MK1_Vorlauf",
    "ID_Visi_Temp_MK1VL_Soll",
    "ID_Visi_Temp_Raumstation",
    "ID_Visi_Temp_MK2_Vorlauf",
    "ID_Visi_Temp_MK2VL_Soll",
    "ID_Visi_Temp_Solarkoll",
    "ID_Visi_Temp_Solarsp",
    "ID_Visi_Temp_Ext_Energ",
    "ID_Visi_IN_ASD",
    "ID_Visi_IN_BWT",
    "ID_Visi_IN_EVU",
    "ID_Visi_IN_HD",
    "ID_Visi_IN_MOT",
    "ID_Visi_IN_ND",
    "ID_Visi_IN_PEX",
    "ID_Visi_IN_SWT",
    "ID_Visi_OUT_Abtauventil",
    "ID_Visi_OUT_BUP",
    "ID_Visi_OUT_FUP1",
    "ID_Visi_OUT_HUP",
    "ID_Visi_OUT_Mischer1Auf",
    "ID_Visi_OUT_Mischer1Zu",
    "ID_Visi_OUT_Ventilation",
    "ID_Visi_OUT_Ventil_BOSUP",
    "ID_Visi_OUT_Verdichter1",
    "ID_Visi_OUT_Verdichter2",
    "ID_Visi_OUT_ZIP",
    "ID_Visi_OUT_ZUP",
    "ID_Visi_OUT_ZWE1",
    "ID_Visi_OUT_ZWE2_SST",
    "ID_Visi_OUT_ZWE3",
    "ID_Visi_OUT_FUP2",
    "ID_Visi_OUT_SLP",
    "ID_Visi_OUT_SUP",
    "ID_Visi_OUT_Mischer2Auf",
    "ID_Visi_OUT_Mischer2Zu",
]


def visibilities_catalogue() -> Dict[int, RegisterDescriptor]:
    """Fresh descriptors for every named visibility slot."""
    return {index: boolean(name) for index, name in enumerate(_NAMES)}


def new_visibilities_map(size: Optional[int] = VISIBILITIES_SIZE) -> RegisterMap:
    """
    Create an empty visibilities map.

    Unnamed slots are still visibility flags, so they decode as booleans.
    """
    catalogue = visibilities_catalogue()
    extent = len(_NAMES) if size is None else size
    for index in range(len(_NAMES), extent):
        catalogue[index] = boolean(f"Unknown_Visibility_{index}")

    return build_register_map(
        catalogue, bank="visibilities", label="Visibility", size=size
    )
