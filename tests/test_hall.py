# python -m unittest tests/test_hall.py
import unittest

from symxtal.constants import DEN
from symxtal.hall import (
    generators_from_hall,
    hall_matrix_symbol,
    hall_rotation_z,
    hall_translation_from_symbol,
    parse_hall_change_of_basis,
    symops_from_hall,
)
from symxtal.msg import GroupTooLarge, InvalidHallSymbol
from symxtal.operations import Op
from symxtal.symmetry import find_spacegroup_by_ops


class TestHall(unittest.TestCase):
    def test_generators_from_hall(self):
        # examples from http://cci.lbl.gov/sginfo/hall_symbols.html
        assert generators_from_hall("p -2xc").sym_ops == ["x,y,z", "-x,y,z+1/2"]
        assert generators_from_hall("p 3*").sym_ops == ["x,y,z", "z,x,y"]
        assert generators_from_hall("p 4vw").sym_ops == ["x,y,z", "-y,x+1/4,z+1/4"]
        assert generators_from_hall("p 61 2 (0 0 -1)").sym_ops == [
            "x,y,z",
            "x-y,x,z+1/6",
            "-y,-x,-z+5/6",
        ]
        # examples from the table
        assert generators_from_hall("P -2 -2").sym_ops == ["x,y,z", "x,y,-z", "-x,y,z"]
        gops = generators_from_hall("-I 4bd 2c 3")
        assert gops.sym_ops[1] == "-x,-y,-z"
        assert len(gops.sym_ops) == 5
        assert len(gops.cen_ops) == 2
        # the same operations in different notation
        a = generators_from_hall("P 3*")
        b = generators_from_hall("R 3 (-y+z,x+z,-x+y+z)")
        assert a.sym_ops == b.sym_ops
        assert a.cen_ops == b.cen_ops

    def test_bare_one(self):
        gops = generators_from_hall("P 1")
        assert gops.sym_ops == ["x,y,z"]
        gops = generators_from_hall("-P 1")
        assert gops.sym_ops == ["x,y,z", "-x,-y,-z"]

    def test_symops_from_hall(self):
        gops = symops_from_hall("P 4w 2c")
        assert gops.order() == 8
        assert not gops.is_centric()
        assert find_spacegroup_by_ops(gops).number == 91
        gops = symops_from_hall("-F 4 2 3")
        assert len(gops.sym_ops) == 48
        assert len(gops.cen_ops) == 4
        assert len(gops) == 192
        assert gops.sym_ops[0] == Op.identity()

    def test_implicit_axes(self):
        # 2-fold after 4-fold goes along x
        op, n = hall_matrix_symbol("2", 2, 4)
        assert n == 2
        assert op == "x,-y,-z"
        # 2-fold after 3-fold goes along the ' diagonal
        op, n = hall_matrix_symbol("2", 2, 3)
        assert op == "-y,-x,-z"
        op, n = hall_matrix_symbol("3", 3, 2)
        assert op == "z,x,y"
        op, n = hall_matrix_symbol("-1n", 3, 2)
        assert op == "-x+1/2,-y+1/2,-z+1/2"
        op, n = hall_matrix_symbol("2x", 2, 1)
        assert op == "x,-y,-z"
        op, n = hall_matrix_symbol("41y", 1, 0)
        assert op == "z,y+1/4,-x"
        self.assertRaises(InvalidHallSymbol, hall_matrix_symbol, "2", 2, 1)
        self.assertRaises(InvalidHallSymbol, hall_matrix_symbol, "2", 3, 2)

    def test_rotation_and_translation(self):
        assert hall_rotation_z(1) == Op.identity().rot
        assert hall_rotation_z('"') == Op("y,x,-z").rot
        assert hall_translation_from_symbol("d") == (DEN // 4, DEN // 4, DEN // 4)
        self.assertRaises(InvalidHallSymbol, hall_rotation_z, 5)
        self.assertRaises(InvalidHallSymbol, hall_translation_from_symbol, "q")

    def test_change_of_basis(self):
        assert parse_hall_change_of_basis("0 0 1") == Op("x,y,z+1/12")
        assert parse_hall_change_of_basis("0 0 -1").tran == (0, 0, -2)
        assert parse_hall_change_of_basis("0 0 13") == Op("x,y,z+1/12")
        assert parse_hall_change_of_basis("x-y,x,z") == Op("x-y,x,z")
        self.assertRaises(InvalidHallSymbol, parse_hall_change_of_basis, "0 0")
        self.assertRaises(InvalidHallSymbol, parse_hall_change_of_basis, "0 a 1")
        with self.assertRaises(InvalidHallSymbol) as cm:
            parse_hall_change_of_basis("x,y")
        assert cm.exception.expression == "x,y"

    def test_errors(self):
        bad = [
            ("P 7 2", "wrong n-fold order"),
            ("P 5", "wrong n-fold order"),
            ("Q 2", "not a lattice symbol"),
            ("P 2 2 3 (0 0 1", "missing ')'"),
            ("P 2 (0 0 1) x", "unexpected characters"),
            ("P 2 (x,y)", "two commas"),
            ("P 2k", "unknown symbol"),
            ("P 21 2 2", "missing axis"),
            ("P 4'", "wrong symbol"),
            ("P 212", "two numeric subscripts"),
            ("-", "not a Hall symbol"),
        ]
        for hall, text in bad:
            with self.assertRaises(InvalidHallSymbol) as cm:
                symops_from_hall(hall)
            assert text in cm.exception.message, (hall, cm.exception.message)
        with self.assertRaises(InvalidHallSymbol) as cm:
            symops_from_hall("P 2k")
        assert cm.exception.expression == "k"

    def test_unsupported_change_of_basis(self):
        for hall in ["P 2xa (1/24*x,y,z)", "P 2 (x,x,z)"]:
            with self.assertRaises(InvalidHallSymbol) as cm:
                symops_from_hall(hall)
            assert "change of basis" in cm.exception.message
            assert cm.exception.expression == hall
        self.assertRaises(InvalidHallSymbol, generators_from_hall, "P 2 (x,x,z)")

    def test_group_too_large(self):
        # not a crystallographic operation, its powers never repeat
        gops = generators_from_hall("P 1")
        gops.sym_ops.append(Op("x+y,y,z"))
        self.assertRaises(GroupTooLarge, gops.add_missing_elements)


if __name__ == "__main__":
    unittest.main()
