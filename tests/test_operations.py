# python -m unittest tests/test_operations.py
import random
import unittest

import numpy as np
from monty.json import MontyDecoder
from pymatgen.core.operations import SymmOp

from symxtal.msg import InvalidTriplet, SingularMatrix
from symxtal.operations import Op, make_triplet_part, parse_triplet, parse_triplet_part
from symxtal.symmetry import get_spacegroup_by_name

D = Op.DEN

CANONICAL_SINGLES = {
    "x": [D, 0, 0, 0],
    "z": [0, 0, D, 0],
    "-y": [0, -D, 0, 0],
    "-z": [0, 0, -D, 0],
    "x-y": [D, -D, 0, 0],
    "-x+y": [-D, D, 0, 0],
    "x+1/2": [D, 0, 0, D // 2],
    "y+1/4": [0, D, 0, D // 4],
    "z+3/4": [0, 0, D, D * 3 // 4],
    "z+1/3": [0, 0, D, D * 1 // 3],
    "z+1/6": [0, 0, D, D // 6],
    "z+2/3": [0, 0, D, D * 2 // 3],
    "z+5/6": [0, 0, D, D * 5 // 6],
    "-x+1/4": [-D, 0, 0, D // 4],
    "-y+1/2": [0, -D, 0, D // 2],
    "-y+3/4": [0, -D, 0, D * 3 // 4],
    "-z+1/3": [0, 0, -D, D // 3],
    "-z+1/6": [0, 0, -D, D // 6],
    "-z+2/3": [0, 0, -D, D * 2 // 3],
    "-z+5/6": [0, 0, -D, D * 5 // 6],
}

OTHER_SINGLES = {
    # order and letter case may vary
    "Y-x": [-D, D, 0, 0],
    "-X": [-D, 0, 0, 0],
    "-1/2+Y": [0, D, 0, -D // 2],
    # non-crystallographic translations
    "x+3": [D, 0, 0, D * 3],
    "1+Y": [0, D, 0, D],
    "-2+Y": [0, D, 0, -D * 2],
    "-z-5/6": [0, 0, -D, -D * 5 // 6],
    "h": [D, 0, 0, 0],
    "-k+l": [0, -D, D, 0],
    "1/2*a - 1/2*b": [D // 2, -D // 2, 0, 0],
}


class TestTriplet(unittest.TestCase):
    def test_parse_triplet_part(self):
        for single, row in CANONICAL_SINGLES.items():
            assert parse_triplet_part(single) == row
        for single, row in OTHER_SINGLES.items():
            assert parse_triplet_part(single) == row

    def test_make_triplet_part(self):
        assert make_triplet_part(0, 0, 0, 1) == f"1/{D}"
        for single, row in CANONICAL_SINGLES.items():
            assert make_triplet_part(*row) == single
        assert make_triplet_part(D, 0, -D, 0, style="h") == "h-l"
        assert make_triplet_part(D // 3, 0, 0, 0) == "1/3*x"

    def test_triplet_roundtrip(self):
        singles = list(CANONICAL_SINGLES.keys())
        for i in range(10):
            triplet = ",".join(random.choice(singles) for j in range(3))
            assert parse_triplet(triplet).triplet() == triplet
        assert Op(" x , - y, + z ").triplet() == "x,-y,z"
        assert Op("x_,_-y,_z").triplet() == "x,-y,z"
        assert Op("-x,y,z").triplet("h") == "-h,k,l"

    def test_triplet_styles(self):
        op = Op("y-x,-y,z+1/2")
        assert op.triplet() == "-x+y,-y,z+1/2"
        assert op.triplet("h") == "-h+k,-k,l+1/2"
        assert op.triplet("a") == "-a+b,-b,c+1/2"
        self.assertRaises(ValueError, op.triplet, "u")
        self.assertRaises(ValueError, make_triplet_part, D, 0, 0, 0, "X")

    def test_errors(self):
        bad = [
            ("x,y", "two commas"),
            ("x,y,z,", "two commas"),
            ("x,y,z+", "trailing sign"),
            ("x,y,q", "unexpected character"),
            ("x,y,z+1/5", "Wrong denominator"),
            ("x,y,z+1/0", "Wrong denominator"),
            ("x,y,2x", "wrong or unsupported"),
            ("x,,z", "empty part"),
            ("x,y,1/2*", "unexpected character"),
        ]
        for triplet, text in bad:
            with self.assertRaises(InvalidTriplet) as cm:
                parse_triplet(triplet)
            assert text in cm.exception.message
        # InvalidTriplet is also a ValueError
        self.assertRaises(ValueError, Op, "x,y")


class TestOp(unittest.TestCase):
    def test_combine(self):
        a = Op("x+1/3,z,-y")
        assert a.combine(a).triplet() == "x+2/3,-y,-z"
        assert "x,-y,z" * Op("-x,-y,z") == "-x,y,z"
        a = Op("-y+1/4,x+3/4,z+1/4")
        b = Op("-x+1/2,y,-z")
        assert (a * b).triplet() == "-y+1/4,-x+1/4,-z+1/4"
        c = "-y,-z,-x"
        assert b * c != c * b
        assert (a * c).triplet() == "z+1/4,-y+3/4,-x+1/4"
        assert b * c == Op("y+1/2,-z,x")
        assert c * b == "-y,z,x+1/2"

    def test_wrap(self):
        op = Op("x-1/2,y+3,-z-5/6")
        assert op.wrap().tran == (12, 0, 4)
        assert op.wrap().rot == op.rot
        assert op.translated((12, 0, 0)).tran == (0, 72, -20)
        assert op.add_centering((12, 0, 0)).tran == (0, 0, 4)

    def test_invert(self):
        for xyz in ["-y,-x,-z+1/4", "y,-x,z+3/4", "y,x,-z", "y+1/2,x,-z+1/3"]:
            op = Op(xyz)
            assert op * op.inverse() == "x,y,z"
            assert op.inverse().inverse() == op
        # change-of-basis op between hexagonal and trigonal settings
        op = Op("-y+z,x+z,-x+y+z")
        assert op.det_rot() == 3 * D**3
        inv = op.inverse()
        assert inv * op == "x,y,z"
        assert op * inv == "x,y,z"
        expected_inv = "-1/3*x+2/3*y-1/3*z,-2/3*x+1/3*y+1/3*z,1/3*x+1/3*y+1/3*z"
        assert inv.triplet() == expected_inv
        assert Op(expected_inv) == inv
        op = Op("1/2*x+1/2*y,-1/2*x+1/2*y,z")
        assert op.inverse().triplet() == "x-y,x+y,z"

    def test_singular(self):
        with self.assertRaises(SingularMatrix) as cm:
            Op("x,x,z+1/2").inverse()
        assert "x,x,z" in cm.exception.message

    def test_det(self):
        assert Op("x,y,z").det_rot() == D**3
        assert Op("-x,-y,-z").det_rot() == -(D**3)
        assert Op("-x,y,z").det_rot() < 0
        assert Op("-y,x-y,z").det_rot() == D**3

    def test_negated(self):
        op = Op("-y,x,z+1/4")
        assert op.negated() == Op("y,-x,-z-1/4")
        assert op.negated_rot() == Op("y,-x,-z").rot

    def test_group_axioms(self):
        ops = list(get_spacegroup_by_name("P 43 3 2").operations())
        identity = Op.identity()
        for a in random.sample(ops, 8):
            assert identity * a == a
            assert a * identity == a
            assert a * a.inverse() == identity
            for b in random.sample(ops, 4):
                for c in random.sample(ops, 4):
                    assert (a * b) * c == a * (b * c)

    def test_seitz(self):
        op = Op("-y,x-y,z+1/3")
        m = op.int_seitz()
        assert m.shape == (4, 4)
        assert m[0, 1] == -D
        assert m[2, 3] == D // 3
        assert m[3, 3] == 1
        f = op.float_seitz()
        assert np.allclose(f[:3, :3], m[:3, :3] / D)
        assert abs(f[2, 3] - 1 / 3) < 1e-12
        assert np.allclose(f[3], [0, 0, 0, 1])

    def test_apply_to_xyz(self):
        op = Op("-y,x-y,z+1/3")
        xyz = op.apply_to_xyz([0.1, 0.2, 0.3])
        assert np.allclose(xyz, [-0.2, -0.1, 0.3 + 1 / 3])
        xyzs = op.apply_to_xyz(np.array([[0.1, 0.2, 0.3], [0, 0, 0]]))
        assert xyzs.shape == (2, 3)
        assert np.allclose(xyzs[1], [0, 0, 1 / 3])

    def test_apply_to_hkl(self):
        assert Op("-y,x-y,z").apply_to_hkl([1, 2, 3]) == [2, -3, 3]
        assert Op("x,y,z+1/2").apply_to_hkl([1, 2, 3]) == [1, 2, 3]

    def test_ordering(self):
        ops = [Op("x,y,z"), Op("-x,-y,z"), Op("x,y,z+1/2")]
        assert sorted(ops)[0] == Op("-x,-y,z")
        assert Op("x,y,z") < Op("x,y,z+1/2")
        assert len({Op("x,y,z"), Op(" x, y, z"), Op("-x,y,z")}) == 2

    def test_symmop(self):
        op = Op("-y+1/4,x+3/4,z+1/4")
        symmop = op.to_symmop()
        assert isinstance(symmop, SymmOp)
        assert np.allclose(symmop.operate([0, 0, 0]), [0.25, 0.75, 0.25])
        assert Op.from_symmop(symmop) == op
        symmop = SymmOp.from_xyz_str("x+1/2,-y,z")
        assert Op.from_symmop(symmop) == Op("x+1/2,-y,z")
        self.assertRaises(ValueError, Op.from_symmop, SymmOp.from_rotation_and_translation(np.eye(3), [0.1, 0, 0]))

    def test_as_dict(self):
        op = Op("-y+1/4,x+3/4,z+1/4")
        d = op.as_dict()
        assert d["tran"] == [6, 18, 6]
        assert Op.from_dict(d) == op
        assert MontyDecoder().process_decoded(d) == op

    def test_phase_shift(self):
        op = Op("x,y,z+1/2")
        assert abs(op.phase_shift(0, 0, 1) + np.pi) < 1e-12
        assert op.phase_shift(1, 1, 0) == 0


if __name__ == "__main__":
    unittest.main()
