"""
Module for the reciprocal-space asymmetric unit (ASU). The ASU is the
same as in CCP4 and cctbx: ten patterns, one chosen for each space group.
"""
# Imports
# ------------------------------
# symxtal imports
from symxtal.constants import DEN
from symxtal.database.spacegroups import CCP4_HKL_ASU
from symxtal.msg import SpaceGroupNotFound

_CONDITIONS = (
    "l>0 or (l=0 and (h>0 or (h=0 and k>=0)))",
    "k>=0 and (l>0 or (l=0 and h>=0))",
    "h>=0 and k>=0 and l>=0",
    "l>=0 and ((h>=0 and k>0) or (h=0 and k=0))",
    "h>=k and k>=0 and l>=0",
    "(h>=0 and k>0) or (h=0 and k=0 and l>=0)",
    "h>=k and k>=0 and (k>0 or l>=0)",
    "h>=k and k>=0 and (h>k or l>=0)",
    "h>=0 and ((l>=h and k>h) or (l=h and k=h))",
    "k>=l and l>=h and h>=0",
)


class HklAsuChecker:
    """
    Check if the reflection (h, k, l) belongs to the reciprocal-space ASU
    of the space group. For non-reference settings the indices are first
    transformed to the reference setting.

    Args:
        sg: SpaceGroup object
    """

    def __init__(self, sg):
        if sg is None:
            raise SpaceGroupNotFound("HklAsuChecker: space group is not given")
        self.idx = CCP4_HKL_ASU[sg.number - 1]
        # Miller indices of the reference setting are P^T (h, k, l)
        p = sg.basisop().rot
        self.rot = tuple(tuple(p[j][i] for j in range(3)) for i in range(3))

    def is_in(self, h, k, l):
        r = self.rot
        hkl = [r[i][0] * h + r[i][1] * k + r[i][2] * l for i in range(3)]
        # the indices are in units of DEN here, the signs are what matters
        return self.is_in_reference_setting(*hkl)

    def is_in_reference_setting(self, h, k, l):
        idx = self.idx
        if idx == 0:
            return l > 0 or (l == 0 and (h > 0 or (h == 0 and k >= 0)))
        if idx == 1:
            return k >= 0 and (l > 0 or (l == 0 and h >= 0))
        if idx == 2:
            return h >= 0 and k >= 0 and l >= 0
        if idx == 3:
            return l >= 0 and ((h >= 0 and k > 0) or (h == 0 and k == 0))
        if idx == 4:
            return h >= k and k >= 0 and l >= 0
        if idx == 5:
            return (h >= 0 and k > 0) or (h == 0 and k == 0 and l >= 0)
        if idx == 6:
            return h >= k and k >= 0 and (k > 0 or l >= 0)
        if idx == 7:
            return h >= k and k >= 0 and (h > k or l >= 0)
        if idx == 8:
            return h >= 0 and ((l >= h and k > h) or (l == h and k == h))
        return k >= l and l >= h and h >= 0

    def condition_str(self):
        return _CONDITIONS[self.idx]

    def to_asu(self, hkl, gops):
        """
        Move the reflection into the ASU, using the symmetry operations and
        Friedel's law.

        Args:
            hkl: Miller indices
            gops: GroupOps of the space group

        Returns:
            a tuple (hkl in the ASU, isym) where isym follows the MTZ
            convention: 2*n+1 for the n-th operation, 2*n+2 for its
            Friedel mate.
        """
        for n, op in enumerate(gops.sym_ops):
            new_hkl = op.apply_to_hkl(hkl)
            if self.is_in(*new_hkl):
                return new_hkl, 2 * n + 1
            mate = [-v for v in new_hkl]
            if self.is_in(*mate):
                return mate, 2 * n + 2
        raise ValueError(f"cannot move {tuple(hkl)} to the ASU")

    def __repr__(self):
        return f"<HklAsuChecker {self.condition_str()} (DEN={DEN})>"
