"""
Module for storing & accessing space group information, including
    - SpaceGroup class, a single setting of a space group
    - the classification into point groups, Laue classes and crystal systems
    - lookup of space groups by number, name or operations
"""
# Imports
# ------------------------------
# Standard libraries
import functools
from collections import namedtuple
from enum import IntEnum

# symxtal imports
from symxtal.constants import crystal_system_names, point_group_names
from symxtal.database.spacegroups import ALT_NAMES, BASISOPS, SPACEGROUP_TABLE
from symxtal.hall import symops_from_hall
from symxtal.msg import InvalidHallSymbol, SpaceGroupNotFound, printx
from symxtal.operations import parse_triplet


class CrystalSystem(IntEnum):
    Triclinic = 0
    Monoclinic = 1
    Orthorhombic = 2
    Tetragonal = 3
    Trigonal = 4
    Hexagonal = 5
    Cubic = 6


PointGroup = IntEnum(
    "PointGroup",
    "C1 Ci C2 Cs C2h D2 C2v D2h C4 S4 C4h D4 C4v D2d D4h C3 C3i D3 C3v D3d "
    "C6 C3h C6h D6 C6v D3h D6h T Th O Td Oh",
    start=0,
)

Laue = IntEnum("Laue", "L1 L2m Lmmm L4m L4mmm L3 L3m L6m L6mmm Lm3 Lm3m", start=0)

_DIGITS = "0123456789"

# point group of each of the 230 space groups
_PG_OF_SG = (
    [0, 1] + [2] * 3 + [3] * 4 + [4] * 6 + [5] * 9 + [6] * 22 + [7] * 28
    + [8] * 6 + [9] * 2 + [10] * 6 + [11] * 10 + [12] * 12 + [13] * 12
    + [14] * 20 + [15] * 4 + [16] * 2 + [17] * 7 + [18] * 6 + [19] * 6
    + [20] * 6 + [21] + [22] * 2 + [23] * 6 + [24] * 4 + [25] * 4
    + [26] * 4 + [27] * 5 + [28] * 7 + [29] * 8 + [30] * 6 + [31] * 10
)
_LAUE_OF_PG = (
    [0] * 2 + [1] * 3 + [2] * 3 + [3] * 3 + [4] * 4 + [5] * 2
    + [6] * 3 + [7] * 3 + [8] * 4 + [9] * 2 + [10] * 3
)
_PG_OF_LAUE = (1, 4, 7, 10, 14, 16, 19, 22, 26, 28, 31)
_SYSTEM_OF_LAUE = (0, 1, 2, 3, 3, 4, 4, 5, 5, 6, 6)


def point_group(number):
    """
    Returns the PointGroup of the space group number 1-230.
    """
    if not 1 <= number <= 230:
        raise SpaceGroupNotFound(f"space group number out of range: {number}", number)
    return PointGroup(_PG_OF_SG[number - 1])


def point_group_hm(pg):
    """H-M symbol of the point group, e.g. '4/mmm'"""
    return point_group_names[pg]


def pointgroup_to_laue(pg):
    return Laue(_LAUE_OF_PG[pg])


def laue_to_pointgroup(laue):
    return PointGroup(_PG_OF_LAUE[laue])


def laue_class_str(laue):
    return point_group_hm(laue_to_pointgroup(laue))


def crystal_system(pg_or_laue):
    """
    Returns the CrystalSystem of a Laue class or of a point group.
    """
    if isinstance(pg_or_laue, PointGroup):
        pg_or_laue = pointgroup_to_laue(pg_or_laue)
    return CrystalSystem(_SYSTEM_OF_LAUE[pg_or_laue])


def crystal_system_str(system):
    return crystal_system_names[system]


class SpaceGroup(
    namedtuple("SpaceGroup", ["number", "ccp4", "hm", "ext", "qualifier", "hall", "basisop_idx"])
):
    """
    A single setting of a space group, as listed in the table.

    Examples
    --------
    >>> from symxtal.symmetry import get_spacegroup_by_name
    >>> sg = get_spacegroup_by_name("R 3 2:R")
    >>> sg.number, sg.xhm(), sg.short_name()
    (155, 'R 3 2:R', 'R32')

    Args:
        number: space group number, 1-230
        ccp4: the number used by CCP4 (0 if not listed, >1000 for other settings)
        hm: Hermann-Mauguin symbol (without the extension)
        ext: '1', '2', 'H', 'R' or ''
        qualifier: e.g. 'cab', '-b1'
        hall: Hall symbol
        basisop_idx: index of the change-of-basis operator to the reference setting
    """

    __slots__ = ()

    def xhm(self):
        """extended H-M symbol, e.g. 'R 3 2:H'"""
        return self.hm + self.colon_ext()

    def colon_ext(self):
        return ":" + self.ext if self.ext else ""

    def short_name(self):
        """
        Returns the short name, e.g. 'P2' for 'P 1 2 1' or 'H32' for 'R 3 2:H'
        """
        s = self.hm
        if len(s) > 6 and s[2] == "1" and s.endswith(" 1"):
            s = s[0] + s[4:-2]
        if self.ext == "H":
            s = "H" + s[1:]
        return s.replace(" ", "")

    def point_group(self):
        return point_group(self.number)

    def point_group_hm(self):
        return point_group_hm(self.point_group())

    def laue_class(self):
        return pointgroup_to_laue(self.point_group())

    def laue_str(self):
        return laue_class_str(self.laue_class())

    def crystal_system(self):
        return crystal_system(self.laue_class())

    def crystal_system_str(self):
        return crystal_system_str(self.crystal_system())

    def basisop_str(self):
        return BASISOPS[self.basisop_idx]

    def basisop(self):
        """
        Returns the change-of-basis Op that transforms the operations of the
        reference setting into this setting.
        """
        return parse_triplet(self.basisop_str())

    def is_reference_setting(self):
        return self.basisop_idx == 0

    def operations(self):
        """
        Returns a new GroupOps with all operations of this setting.
        """
        return symops_from_hall(self.hall)

    def describe(self):
        """
        Returns a multi-line, human-readable summary of the space group.
        """
        from symxtal.reciprocal import HklAsuChecker

        is_reference = self.is_reference_setting()
        ops = self.operations()
        gf = ops.find_grid_factors()
        lines = [
            f"Number: {self.number}",
            "Is standard setting for this space group: " + ("yes" if is_reference else "no"),
            f"Change-of-basis operator to standard setting: {self.basisop_str()}",
            f"CCP4 number: {self.ccp4}",
            f"Hermann-Mauguin: {self.hm}",
            f"Extended H-M: {self.xhm()}",
            f"Hall symbol: {self.hall}",
            f"Point group: {self.point_group_hm()}",
            "Is centric: " + ("yes" if ops.is_centric() else "no"),
            "Grid restrictions: NX={}n NY={}n NZ={}n".format(*gf),
            "Reciprocal space ASU{}: {}".format(
                "" if is_reference else " wrt. standard setting",
                HklAsuChecker(self).condition_str(),
            ),
            f"{len(ops.cen_ops)} x {len(ops.sym_ops)} symmetry operations:",
        ]
        lines += ["    " + op.triplet() for op in ops]
        return "\n".join(lines)

    def __str__(self):
        return self.xhm()

    def __repr__(self):
        return f"<SpaceGroup {self.number}: {self.xhm()}>"


SpaceGroupAltName = namedtuple("SpaceGroupAltName", ["hm", "ext", "pos"])


"""
Properties for Lazy Loading
"""
class SymmetryData:
    """
    The process-wide tables of space groups, built on the first use.
    """

    _spacegroups = None
    _alt_names = None

    @classmethod
    def get_spacegroup_table(cls):
        if cls._spacegroups is None:
            cls._spacegroups = tuple(SpaceGroup(*row) for row in SPACEGROUP_TABLE)
        return cls._spacegroups

    @classmethod
    def get_alt_names(cls):
        if cls._alt_names is None:
            cls._alt_names = tuple(SpaceGroupAltName(*row) for row in ALT_NAMES)
        return cls._alt_names


def get_spacegroup_table():
    return SymmetryData.get_spacegroup_table()


def get_alt_names():
    return SymmetryData.get_alt_names()


def get_spacegroup_p1():
    return get_spacegroup_table()[0]


def find_spacegroup_by_number(ccp4):
    """
    Returns the SpaceGroup with the given CCP4 number (1-230 for the
    reference settings), or None.
    """
    for sg in get_spacegroup_table():
        if sg.ccp4 == ccp4:
            return sg
    return None


def get_spacegroup_by_number(ccp4):
    sg = find_spacegroup_by_number(ccp4)
    if sg is None:
        raise SpaceGroupNotFound(f"Invalid space-group number: {ccp4}", ccp4)
    return sg


def get_spacegroup_reference_setting(number):
    """
    Returns the reference setting of the space group number 1-230.
    """
    for sg in get_spacegroup_table():
        if sg.number == number and sg.is_reference_setting():
            return sg
    raise SpaceGroupNotFound(f"Invalid space-group number: {number}", number)


def _char(s, i):
    return s[i] if i < len(s) else ""


def _skip_blank(s, i):
    while i < len(s) and s[i] in " \t_":
        i += 1
    return i


def _matches_full_name(p, hm, ext):
    # p starts at the second character of the name, hm at its third
    if _char(hm, 2) != _char(p, 0):
        return False
    a = _skip_blank(p, 1)
    b = _skip_blank(hm, 3)
    while _char(p, a) == _char(hm, b) and b < len(hm):
        a = _skip_blank(p, a + 1)
        b = _skip_blank(hm, b + 1)
    if b < len(hm):
        return False
    if a == len(p):
        return True
    return p[a] == ":" and _char(p, _skip_blank(p, a + 1)) == ext


def _matches_short_name(p, hm):
    # monoclinic names without the 1s, e.g. 'C2' for 'C 1 2 1'
    if not (_char(hm, 2) == "1" and _char(hm, 3) == " " and _char(hm, 4) not in ("1", "")):
        return False
    a = _skip_blank(p, 0)
    b = 4
    while _char(p, a) == _char(hm, b) and _char(hm, b) not in (" ", ""):
        a = _skip_blank(p, a + 1)
        b += 1
    return a == len(p) and _char(hm, b) == " "


def find_spacegroup_by_name(name):
    """
    Find the space group from the H-M symbol ('P 21 21 21', 'P212121'),
    the extended symbol ('R 3 2:R', 'H32'), the short monoclinic symbol
    ('C2'), the newer symbols with 'e' ('Aem2') or the number.

    Args:
        name: string

    Returns:
        the SpaceGroup object or None
    """
    i = _skip_blank(name, 0)
    if i == len(name):
        return None
    if name[i] in _DIGITS:
        number = name[i:].strip(" \t_")
        if any(c not in _DIGITS for c in number):
            return None
        return find_spacegroup_by_number(int(number))
    first = name[i].upper()
    if first == "H":
        first = "R"
    p = name[_skip_blank(name, i + 1):]
    if not p:
        return None
    for sg in get_spacegroup_table():
        if sg.hm[0] != first:
            continue
        if _matches_full_name(p, sg.hm, sg.ext) or _matches_short_name(p, sg.hm):
            return sg
    for alt in get_alt_names():
        if alt.hm[0] == first and _matches_full_name(p, alt.hm, alt.ext):
            return get_spacegroup_table()[alt.pos]
    return None


def get_spacegroup_by_name(name):
    sg = find_spacegroup_by_name(name)
    if sg is None:
        raise SpaceGroupNotFound(f"Unknown space-group name: {name}", name)
    return sg


@functools.lru_cache(maxsize=None)
def _table_operations(hall):
    # shared, must not be modified
    return symops_from_hall(hall)


def find_spacegroup_by_ops(gops):
    """
    Find the table entry with the same set of operations.

    Args:
        gops: GroupOps object

    Returns:
        the SpaceGroup object or None
    """
    c = gops.find_centering()
    if c is None:
        return None
    for sg in get_spacegroup_table():
        if c in (sg.hall[0], sg.hall[1]) and gops.is_same_as(_table_operations(sg.hall)):
            return sg
    return None


def find_spacegroup(text):
    """
    Find the space group from the name or, failing that, from the Hall
    symbol.

    Args:
        text: name, number or Hall symbol

    Returns:
        a tuple (SpaceGroup or None, GroupOps or None)
    """
    sg = find_spacegroup_by_name(text)
    if sg is not None:
        return sg, sg.operations()
    try:
        gops = symops_from_hall(text)
    except InvalidHallSymbol as err:
        printx(f"Space group not found: {text} ({err.message})", priority=3)
        return None, None
    return find_spacegroup_by_ops(gops), gops
