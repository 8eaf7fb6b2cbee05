# python -m unittest tests/test_reciprocal.py
import itertools
import math
import unittest

from symxtal.msg import SpaceGroupNotFound
from symxtal.reciprocal import HklAsuChecker
from symxtal.symmetry import (
    find_spacegroup_by_name,
    get_spacegroup_by_name,
    get_spacegroup_reference_setting,
    get_spacegroup_table,
)


def hkl_cube(n):
    return list(itertools.product(range(-n, n + 1), repeat=3))


def friedel_orbit(hkl, gops):
    orbit = set()
    for op in gops.sym_ops:
        m = tuple(op.apply_to_hkl(hkl))
        orbit.add(m)
        orbit.add(tuple(-v for v in m))
    return orbit


class TestAsu(unittest.TestCase):
    def check_partition(self, sg, n):
        checker = HklAsuChecker(sg)
        gops = sg.operations()
        seen = set()
        for hkl in hkl_cube(n):
            if hkl in seen:
                continue
            orbit = friedel_orbit(hkl, gops)
            seen.update(orbit)
            count = sum(1 for m in orbit if checker.is_in(*m))
            assert count == 1, (sg.xhm(), hkl, count)

    def test_reference_settings(self):
        for number in range(1, 231):
            self.check_partition(get_spacegroup_reference_setting(number), 3)

    def test_other_settings(self):
        for sg in get_spacegroup_table():
            if sg.is_reference_setting():
                continue
            self.check_partition(sg, 2)

    def test_condition_str(self):
        checker = HklAsuChecker(get_spacegroup_by_name("P 1"))
        assert checker.condition_str() == "l>0 or (l=0 and (h>0 or (h=0 and k>=0)))"
        checker = HklAsuChecker(get_spacegroup_by_name("P 21 21 21"))
        assert checker.condition_str() == "h>=0 and k>=0 and l>=0"
        checker = HklAsuChecker(get_spacegroup_by_name("I a -3 d"))
        assert checker.condition_str() == "k>=l and l>=h and h>=0"
        assert checker.is_in(0, 2, 1)
        assert not checker.is_in(1, 2, 0)

    def test_is_in(self):
        checker = HklAsuChecker(get_spacegroup_by_name("P 1 2 1"))
        assert checker.is_in(1, 0, 0)
        assert not checker.is_in(-1, 0, 0)
        assert not checker.is_in(0, -1, 1)
        # the unique axis is c in this setting
        checker = HklAsuChecker(get_spacegroup_by_name("P 1 1 2"))
        assert checker.is_in(0, 1, 0)
        assert not checker.is_in(1, 1, -1)
        assert checker.is_in_reference_setting(-1, 1, 1)

    def test_none(self):
        self.assertRaises(SpaceGroupNotFound, HklAsuChecker, find_spacegroup_by_name("abc"))

    def test_to_asu(self):
        sg = get_spacegroup_by_name("P 31 2 1")
        checker = HklAsuChecker(sg)
        gops = sg.operations()
        for hkl in hkl_cube(2):
            asu, isym = checker.to_asu(hkl, gops)
            assert checker.is_in(*asu)
            op = gops.sym_ops[(isym - 1) // 2]
            expected = op.apply_to_hkl(hkl)
            if isym % 2 == 0:
                expected = [-v for v in expected]
            assert asu == expected
        assert checker.to_asu([0, 0, -1], gops)[0] == [0, 0, 1]

    # based on example from pages 9-10 in
    # http://oldwww.iucr.org/iucr-top/comm/cteach/pamphlets/9/9.pdf
    def test_phase_shift(self):
        ops = find_spacegroup_by_name("P 31 2 1").operations()
        refl = [3, 0, 1]
        expected_equiv = [
            # in the paper the last two reflections are swapped
            [3, 0, 1],
            [0, -3, 1],
            [-3, 3, 1],
            [0, 3, -1],
            [3, -3, -1],
            [-3, 0, -1],
        ]
        assert [op.apply_to_hkl(refl) for op in ops] == expected_equiv
        expected_shifts = [0, -120, -240, 0, -240, -120]
        for op, expected in zip(ops, expected_shifts):
            shift = math.degrees(op.phase_shift(*refl))
            d = (shift - expected) % 360
            assert min(d, 360 - d) < 1e-6


if __name__ == "__main__":
    unittest.main()
