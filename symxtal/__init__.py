"""
symxtal: exact crystallographic space-group symmetry in Python.

This module initializes the symxtal package, providing the main classes
and lookup functions.
"""

# symxtal Modules
from symxtal.group import GroupOps, centring_vectors, split_centering_vectors
from symxtal.hall import generators_from_hall, symops_from_hall
from symxtal.operations import Op, parse_triplet
from symxtal.reciprocal import HklAsuChecker
from symxtal.symmetry import (
    SpaceGroup,
    find_spacegroup,
    find_spacegroup_by_name,
    find_spacegroup_by_number,
    find_spacegroup_by_ops,
    get_spacegroup_by_name,
    get_spacegroup_by_number,
    get_spacegroup_reference_setting,
    get_spacegroup_table,
)
from symxtal.version import __version__
