"""
Luxtronik Registers Package
===========================

Typed views over the controller's three register banks.

Components:
- descriptor.py: RegisterDescriptor with decode/encode and change detection
- datatypes.py: Constructors for every register family
- codes.py: Enumerated code tables
- register_map.py: Dense slot -> descriptor map with bulk assignment
- parameters.py / calculations.py / visibilities.py: Bank catalogues

Usage Example:
>>> from luxtronik.registers import new_calculations_map
>>>
>>> calculations = new_calculations_map()
>>> calculations[10].set_raw(215)
>>> calculations[10].decode(), calculations[10].unit
(21.5, '°C')

License: MIT
"""

from .descriptor import RegisterClass, RegisterDescriptor, ReturnShape

from .register_map import RegisterMap, build_register_map

from .parameters import PARAMETERS_SIZE, new_parameter_map
from .calculations import CALCULATIONS_SIZE, new_calculations_map
from .visibilities import VISIBILITIES_SIZE, new_visibilities_map

from . import datatypes

__all__ = [
    # Descriptors
    "RegisterClass",
    "RegisterDescriptor",
    "ReturnShape",
    "datatypes",
    # Maps
    "RegisterMap",
    "build_register_map",
    "new_parameter_map",
    "new_calculations_map",
    "new_visibilities_map",
    "PARAMETERS_SIZE",
    "CALCULATIONS_SIZE",
    "VISIBILITIES_SIZE",
]
