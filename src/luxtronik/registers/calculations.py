"""
Calculations Catalogue
======================

Read-only measured and derived values (command 3004).

Slot layout follows the controller's documentation names. Slots 81..90
hold the firmware version one character per slot; 81..87 form the
version string exposed by RegisterMap.version.

License: MIT
"""

from typing import Dict, Optional

from .datatypes import (
    bivalence_level,
    boolean,
    celsius,
    character,
    count,
    energy,
    errorcode,
    flow,
    frequency,
    heatpump_code,
    icon,
    ipv4_address,
    kelvin,
    level,
    main_menu_status_line1,
    main_menu_status_line2,
    main_menu_status_line3,
    major_minor_version,
    operation_mode,
    percent,
    power,
    pressure,
    sec_operation_mode,
    seconds,
    speed,
    switchoff_file,
    timestamp,
    unknown,
    voltage,
)
from .descriptor import RegisterDescriptor
from .register_map import RegisterMap, build_register_map

CALCULATIONS_SIZE = 260


def calculations_catalogue() -> Dict[int, RegisterDescriptor]:
    """Fresh descriptors for every named calculation slot."""
    catalogue = {
        10: celsius("ID_WEB_Temperatur_TVL"),
        11: celsius("ID_WEB_Temperatur_TRL"),
        12: celsius("ID_WEB_Sollwert_TRL_HZ"),
        13: celsius("ID_WEB_Temperatur_TRL_ext"),
        14: celsius("ID_WEB_Temperatur_THG"),
        15: celsius("ID_WEB_Temperatur_TA"),
        16: celsius("ID_WEB_Mitteltemperatur"),
        17: celsius("ID_WEB_Temperatur_TBW"),
        18: celsius("ID_WEB_Einst_BWS_akt"),
        19: celsius("ID_WEB_Temperatur_TWE"),
        20: celsius("ID_WEB_Temperatur_TWA"),
        21: celsius("ID_WEB_Temperatur_TFB1"),
        22: celsius("ID_WEB_Sollwert_TVL_MK1"),
        23: celsius("ID_WEB_Temperatur_RFV"),
        24: celsius("ID_WEB_Temperatur_TFB2"),
        25: celsius("ID_WEB_Sollwert_TVL_MK2"),
        26: celsius("ID_WEB_Temperatur_TSK"),
        27: celsius("ID_WEB_Temperatur_TSS"),
        28: celsius("ID_WEB_Temperatur_TEE"),
        29: boolean("ID_WEB_ASDin"),
        30: boolean("ID_WEB_BWTin"),
        31: boolean("ID_WEB_EVUin"),
        32: boolean("ID_WEB_HDin"),
        33: boolean("ID_WEB_MOTin"),
        34: boolean("ID_WEB_NDin"),
        35: boolean("ID_WEB_PEXin"),
        36: boolean("ID_WEB_SWTin"),
        37: boolean("ID_WEB_AVout"),
        38: boolean("ID_WEB_BUPout"),
        39: boolean("ID_WEB_HUPout"),
        40: boolean("ID_WEB_MA1out"),
        41: boolean("ID_WEB_MZ1out"),
        42: boolean("ID_WEB_VENout"),
        43: boolean("ID_WEB_VBOout"),
        44: boolean("ID_WEB_VD1out"),
        45: boolean("ID_WEB_VD2out"),
        46: boolean("ID_WEB_ZIPout"),
        47: boolean("ID_WEB_ZUPout"),
        48: boolean("ID_WEB_ZW1out"),
        49: boolean("ID_WEB_ZW2SSTout"),
        50: boolean("ID_WEB_ZW3SSTout"),
        51: boolean("ID_WEB_FP2out"),
        52: boolean("ID_WEB_SLPout"),
        53: boolean("ID_WEB_SUPout"),
        54: boolean("ID_WEB_MZ2out"),
        55: boolean("ID_WEB_MA2out"),
        56: seconds("ID_WEB_Zaehler_BetrZeitVD1"),
        57: count("ID_WEB_Zaehler_BetrZeitImpVD1"),
        58: seconds("ID_WEB_Zaehler_BetrZeitVD2"),
        59: count("ID_WEB_Zaehler_BetrZeitImpVD2"),
        60: seconds("ID_WEB_Zaehler_BetrZeitZWE1"),
        61: seconds("ID_WEB_Zaehler_BetrZeitZWE2"),
        62: seconds("ID_WEB_Zaehler_BetrZeitZWE3"),
        63: seconds("ID_WEB_Zaehler_BetrZeitWP"),
        64: seconds("ID_WEB_Zaehler_BetrZeitHz"),
        65: seconds("ID_WEB_Zaehler_BetrZeitBW"),
        66: seconds("ID_WEB_Zaehler_BetrZeitKue"),
        67: seconds("ID_WEB_Time_WPein_akt"),
        68: seconds("ID_WEB_Time_ZWE1_akt"),
        69: seconds("ID_WEB_Time_ZWE2_akt"),
        70: seconds("ID_WEB_Timer_EinschVerz"),
        71: seconds("ID_WEB_Time_SSPAUS_akt"),
        72: seconds("ID_WEB_Time_SSPEIN_akt"),
        73: seconds("ID_WEB_Time_VDStd_akt"),
        74: seconds("ID_WEB_Time_HRM_akt"),
        75: seconds("ID_WEB_Time_HRW_akt"),
        76: seconds("ID_WEB_Time_LGS_akt"),
        77: seconds("ID_WEB_Time_SBW_akt"),
        78: heatpump_code("ID_WEB_Code_WP_akt"),
        79: bivalence_level("ID_WEB_BIV_Stufe_akt"),
        80: operation_mode("ID_WEB_WP_BZ_akt"),
        91: ipv4_address("ID_WEB_AdresseIP_akt"),
        92: ipv4_address("ID_WEB_SubNetMask_akt"),
        93: ipv4_address("ID_WEB_Add_Broadcast"),
        94: ipv4_address("ID_WEB_Add_StdGateway"),
        105: count("ID_WEB_AnzahlFehlerInSpeicher"),
        116: boolean("ID_WEB_Comfort_exists"),
        117: main_menu_status_line1("ID_WEB_HauptMenuStatus_Zeile1"),
        118: main_menu_status_line2("ID_WEB_HauptMenuStatus_Zeile2"),
        119: main_menu_status_line3("ID_WEB_HauptMenuStatus_Zeile3"),
        120: seconds("ID_WEB_HauptMenuStatus_Zeit"),
        121: level("ID_WEB_HauptMenuAHP_Stufe"),
        122: celsius("ID_WEB_HauptMenuAHP_Temp"),
        123: seconds("ID_WEB_HauptMenuAHP_Zeit"),
        124: boolean("ID_WEB_SH_BWW"),
        125: icon("ID_WEB_SH_HZ"),
        126: icon("ID_WEB_SH_MK1"),
        127: icon("ID_WEB_SH_MK2"),
        128: unknown("ID_WEB_Einst_Kurzrpgramm"),
        129: unknown("ID_WEB_StatusSlave_1"),
        130: unknown("ID_WEB_StatusSlave_2"),
        131: unknown("ID_WEB_StatusSlave_3"),
        132: unknown("ID_WEB_StatusSlave_4"),
        133: unknown("ID_WEB_StatusSlave_5"),
        134: timestamp("ID_WEB_AktuelleTimeStamp"),
        135: icon("ID_WEB_SH_MK3"),
        136: celsius("ID_WEB_Sollwert_TVL_MK3"),
        137: celsius("ID_WEB_Temperatur_TFB3"),
        138: boolean("ID_WEB_MZ3out"),
        139: boolean("ID_WEB_MA3out"),
        140: boolean("ID_WEB_FP3out"),
        141: seconds("ID_WEB_Time_AbtIn"),
        142: celsius("ID_WEB_Temperatur_RFV2"),
        143: celsius("ID_WEB_Temperatur_RFV3"),
        144: icon("ID_WEB_SH_SW"),
        145: seconds("ID_WEB_Zaehler_BetrZeitSW"),
        146: boolean("ID_WEB_FreigabKuehl"),
        147: voltage("ID_WEB_AnalogIn"),
        148: icon("ID_WEB_SonderZeichen"),
        149: icon("ID_WEB_SH_ZIP"),
        150: icon("ID_WEB_WebsrvProgrammWerteBeobachten"),
        151: energy("ID_WEB_WMZ_Heizung"),
        152: energy("ID_WEB_WMZ_Brauchwasser"),
        153: energy("ID_WEB_WMZ_Schwimmbad"),
        154: energy("ID_WEB_WMZ_Seit"),
        155: flow("ID_WEB_WMZ_Durchfluss"),
        156: voltage("ID_WEB_AnalogOut1"),
        157: voltage("ID_WEB_AnalogOut2"),
        158: seconds("ID_WEB_Time_Heissgas"),
        159: celsius("ID_WEB_Temp_Lueftung_Zuluft"),
        160: celsius("ID_WEB_Temp_Lueftung_Abluft"),
        161: seconds("ID_WEB_Zaehler_BetrZeitSolar"),
        162: voltage("ID_WEB_AnalogOut3"),
        163: voltage("ID_WEB_AnalogOut4"),
        164: voltage("ID_WEB_Out_VZU"),
        165: voltage("ID_WEB_Out_VAB"),
        166: boolean("ID_WEB_Out_VSK"),
        167: boolean("ID_WEB_Out_FRH"),
        168: voltage("ID_WEB_AnalogIn2"),
        169: voltage("ID_WEB_AnalogIn3"),
        170: boolean("ID_WEB_SAXin"),
        171: boolean("ID_WEB_SPLin"),
        172: boolean("ID_WEB_Compact_exists"),
        173: flow("ID_WEB_Durchfluss_WQ"),
        174: boolean("ID_WEB_LIN_exists"),
        175: celsius("ID_WEB_LIN_ANSAUG_VERDAMPFER"),
        176: celsius("ID_WEB_LIN_ANSAUG_VERDICHTER"),
        177: celsius("ID_WEB_LIN_VDH"),
        178: kelvin("ID_WEB_LIN_UH"),
        179: kelvin("ID_WEB_LIN_UH_Soll"),
        180: pressure("ID_WEB_LIN_HD"),
        181: pressure("ID_WEB_LIN_ND"),
        182: boolean("ID_WEB_LIN_VDH_out"),
        183: percent("ID_WEB_HZIO_PWM"),
        184: speed("ID_WEB_HZIO_VEN"),
        185: unknown("ID_WEB_HZIO_EVU2"),
        186: boolean("ID_WEB_HZIO_STB"),
        187: energy("ID_WEB_SEC_Qh_Soll"),
        188: energy("ID_WEB_SEC_Qh_Ist"),
        189: celsius("ID_WEB_SEC_TVL_Soll"),
        190: unknown("ID_WEB_SEC_Software"),
        191: sec_operation_mode("ID_WEB_SEC_BZ"),
        192: unknown("ID_WEB_SEC_VWV"),
        193: unknown("ID_WEB_SEC_VD"),
        194: celsius("ID_WEB_SEC_VerdEVI"),
        195: celsius("ID_WEB_SEC_AnsEVI"),
        196: kelvin("ID_WEB_SEC_UEH_EVI"),
        197: kelvin("ID_WEB_SEC_UEH_EVI_S"),
        198: celsius("ID_WEB_SEC_KondTemp"),
        199: celsius("ID_WEB_SEC_FlussigEx"),
        200: celsius("ID_WEB_SEC_UK_EEV"),
        201: pressure("ID_WEB_SEC_EVI_Druck"),
        202: voltage("ID_WEB_SEC_U_Inv"),
        203: celsius("ID_WEB_Temperatur_THG_2"),
        204: celsius("ID_WEB_Temperatur_TWE_2"),
        205: celsius("ID_WEB_LIN_ANSAUG_VERDAMPFER_2"),
        206: celsius("ID_WEB_LIN_ANSAUG_VERDICHTER_2"),
        207: celsius("ID_WEB_LIN_VDH_2"),
        208: kelvin("ID_WEB_LIN_UH_2"),
        209: kelvin("ID_WEB_LIN_UH_Soll_2"),
        210: pressure("ID_WEB_LIN_HD_2"),
        211: pressure("ID_WEB_LIN_ND_2"),
        212: boolean("ID_WEB_HDin_2"),
        213: boolean("ID_WEB_AVout_2"),
        214: boolean("ID_WEB_VBOout_2"),
        215: boolean("ID_WEB_VD1out_2"),
        216: boolean("ID_WEB_LIN_VDH_out_2"),
        227: celsius("ID_WEB_RBE_RT_Ist"),
        228: celsius("ID_WEB_RBE_RT_Soll"),
        229: celsius("ID_WEB_Temperatur_BW_oben"),
        230: heatpump_code("ID_WEB_Code_WP_akt_2"),
        231: frequency("ID_WEB_Freq_VD"),
        232: celsius("Vapourisation_Temperature"),
        233: celsius("Liquefaction_Temperature"),
        234: frequency("ID_WEB_Freq_VD_Soll"),
        235: frequency("ID_WEB_Freq_VD_Min"),
        236: frequency("ID_WEB_Freq_VD_Max"),
        237: kelvin("VBO_Temp_Spread_Soll"),
        238: kelvin("VBO_Temp_Spread_Ist"),
        239: percent("HUP_PWM"),
        240: kelvin("HUP_Temp_Spread_Soll"),
        241: kelvin("HUP_Temp_Spread_Ist"),
        257: power("Heat_Output"),
        258: major_minor_version("RBE_Version"),
    }

    for slot in range(81, 91):
        catalogue[slot] = character(f"ID_WEB_SoftStand_{slot - 81}")

    for n in range(5):
        catalogue[95 + n] = timestamp(f"ID_WEB_ERROR_Time{n}")
        catalogue[100 + n] = errorcode(f"ID_WEB_ERROR_Nr{n}")
        catalogue[106 + n] = switchoff_file(f"ID_WEB_Switchoff_file_Nr{n}")
        catalogue[111 + n] = timestamp(f"ID_WEB_Switchoff_file_Time{n}")
        catalogue[217 + n] = switchoff_file(f"ID_WEB_Switchoff2_Nr{n}")
        catalogue[222 + n] = timestamp(f"ID_WEB_Switchoff2_Time{n}")

    return catalogue


def new_calculations_map(size: Optional[int] = CALCULATIONS_SIZE) -> RegisterMap:
    """
    Create an empty calculations map.

    Args:
        size: Number of slots the controller reports; unnamed slots up to
            this size are filled with read-only 'unknown' descriptors

    Returns:
        RegisterMap with all raw values 0
    """
    return build_register_map(
        calculations_catalogue(), bank="calculations", label="Calculation", size=size
    )
