"""
Module to store the constants
"""

from symxtal.version import __version__

# Constants
# ------------------------------
# Common denominator of rotation and translation entries in Op.
# 24 is divisible by 2, 3, 4, 6 and 8 (1/8 appears in change-of-basis ops).
DEN = 24
# Safety bound for the closure of generators; the largest crystallographic
# point group has 48 elements.
MAX_GROUP_ORDER = 1023
symxtal_verbosity = 1  # constant for printx function

lattice_symbols = "PABCIRSTHF"
# glide/screw translations in Hall symbols, in units of DEN
hall_translations = {
    "a": (DEN // 2, 0, 0),
    "b": (0, DEN // 2, 0),
    "c": (0, 0, DEN // 2),
    "n": (DEN // 2, DEN // 2, DEN // 2),
    "u": (DEN // 4, 0, 0),
    "v": (0, DEN // 4, 0),
    "w": (0, 0, DEN // 4),
    "d": (DEN // 4, DEN // 4, DEN // 4),
}
crystal_system_names = [
    "triclinic",
    "monoclinic",
    "orthorhombic",
    "tetragonal",
    "trigonal",
    "hexagonal",
    "cubic",
]
point_group_names = [
    "1", "-1", "2", "m", "2/m", "222", "mm2", "mmm",
    "4", "-4", "4/m", "422", "4mm", "-42m", "4/mmm", "3",
    "-3", "32", "3m", "-3m", "6", "-6", "6/m", "622",
    "6mm", "-62m", "6/mmm", "23", "m-3", "432", "-43m", "m-3m",
]
