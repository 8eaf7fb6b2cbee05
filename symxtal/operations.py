"""
Module for exact symmetry operations. The class Op stores a 3x3 rotation
matrix and a translation vector as integers over the common denominator
DEN, so that composition, inversion and comparison are exact. Coordinate
triplets such as 'x,-y,z+1/2' are parsed and written by the functions
parse_triplet() and make_triplet_part().
"""
# Imports
# ------------------------------
# Standard libraries
import math

# External Libraries
import numpy as np
from monty.json import MSONable
from pymatgen.core.operations import SymmOp

# symxtal imports
from symxtal.constants import DEN
from symxtal.msg import InvalidTriplet, SingularMatrix

_BLANKS = " \t_"  # '_' can be used as space
_AXES = ("xXhHaA", "yYkKbB", "zZlLcC")
_TRIPLET_STYLES = {"x": "xyz", "h": "hkl", "a": "abc"}


# ------------------------------
# Define functions
def exact_div(num, den):
    """
    Integer division that must not leave a remainder.

    Args:
        num: numerator
        den: denominator

    Returns:
        the exact quotient
    """
    q, r = divmod(num, den)
    if r != 0:
        raise ArithmeticError(f"inexact division {num}/{den}")
    return q


def _skip_blank(s, i):
    while i < len(s) and s[i] in _BLANKS:
        i += 1
    return i


def _read_int(s, i):
    j = i
    while j < len(s) and s[j] in "0123456789":
        j += 1
    return (int(s[i:j]) if j > i else None), j


def parse_triplet_part(s):
    """
    Parse one part of the coordinate triplet, e.g. '-x+1/2' or '1/2*y-z'.

    Args:
        s: string with a single part of the triplet

    Returns:
        a list [x, y, z, shift] of integers in units of 1/DEN
    """
    r = [0, 0, 0, 0]
    num = DEN
    i = _skip_blank(s, 0)
    if i == len(s):
        raise InvalidTriplet("empty part in triplet", s)
    while i < len(s):
        if s[i] in "+-":
            num = DEN if s[i] == "+" else -DEN
            i = _skip_blank(s, i + 1)
            if i == len(s):
                raise InvalidTriplet("trailing sign in: " + s, s)
        if num == 0:
            raise InvalidTriplet("wrong or unsupported triplet format: " + s, s)
        is_shift = False
        if s[i] in "0123456789":
            n, i = _read_int(s, i)
            num *= n
            if i < len(s) and s[i] == "/":
                den, i = _read_int(s, i + 1)
                if den is None or den < 1 or DEN % den != 0:
                    raise InvalidTriplet(f"Wrong denominator {den} in: {s}", s)
                num //= den
            is_shift = i == len(s) or s[i] != "*"
            if not is_shift:
                i = _skip_blank(s, i + 1)
        if is_shift:
            r[3] += num
        else:
            c = s[i] if i < len(s) else ""
            for n_axis, letters in enumerate(_AXES):
                if c and c in letters:
                    r[n_axis] += num
                    break
            else:
                raise InvalidTriplet(f"unexpected character '{c}' in: {s}", s)
            i += 1
        num = 0
        i = _skip_blank(s, i)
    return r


def parse_triplet(s):
    """
    Parse the coordinate triplet.

    Args:
        s: string like 'x,y,z', '-y+1/4, x+3/4, z+1/4' or 'h,-k,-l'

    Returns:
        the Op object
    """
    if s.count(",") != 2:
        raise InvalidTriplet("expected exactly two commas in triplet", s)
    parts = [parse_triplet_part(p) for p in s.split(",")]
    rot = tuple(tuple(p[:3]) for p in parts)
    tran = tuple(p[3] for p in parts)
    return Op(rot=rot, tran=tran)


def _op_fraction(w):
    """w/DEN reduced to the lowest terms, w > 0"""
    d = math.gcd(w, DEN)
    if d == DEN:
        return str(w // d)
    return f"{w // d}/{DEN // d}"


def make_triplet_part(x, y, z, w, style="x"):
    """
    Write a single part of the coordinate triplet.

    Args:
        x, y, z: coefficients of the three axes in units of 1/DEN
        w: the translation in units of 1/DEN
        style: 'x' (x,y,z), 'h' (h,k,l) or 'a' (a,b,c)

    Returns:
        string such as '-x+y+1/3'
    """
    if style not in _TRIPLET_STYLES:
        raise ValueError(f"unknown triplet style: {style}")
    axes = _TRIPLET_STYLES[style]
    s = ""
    for i, v in enumerate((x, y, z)):
        if v != 0:
            if v < 0:
                s += "-"
            elif s:
                s += "+"
            if abs(v) != DEN:
                s += _op_fraction(abs(v)) + "*"
            s += axes[i]
    if w != 0:
        if w < 0:
            s += "-"
        elif s:
            s += "+"
        s += _op_fraction(abs(w))
    return s


class Op(MSONable):
    """
    A symmetry operation, a change-of-basis transformation, or another
    operation of similar kind. Both the rotation matrix and the translation
    vector are fractional, stored as integer numerators over DEN.

    Op is treated as an immutable value: all methods return new objects.

    Examples
    --------
    >>> from symxtal.operations import Op
    >>> a = Op("-y+1/4,x+3/4,z+1/4")
    >>> b = Op("-x+1/2,y,-z")
    >>> (a * b).triplet()
    '-y+1/4,-x+1/4,-z+1/4'

    Args:
        xyz: coordinate triplet, e.g. 'x,-y,z+1/2'
        rot: 3x3 integer matrix (numerators over DEN)
        tran: 3 integers (numerators over DEN)
    """

    DEN = DEN

    def __init__(self, xyz=None, rot=None, tran=None):
        if xyz is not None:
            op = parse_triplet(xyz)
            rot, tran = op.rot, op.tran
        if rot is None:
            rot = ((DEN, 0, 0), (0, DEN, 0), (0, 0, DEN))
        if tran is None:
            tran = (0, 0, 0)
        self.rot = tuple(tuple(int(v) for v in row) for row in rot)
        self.tran = tuple(int(v) for v in tran)

    @classmethod
    def identity(cls):
        return cls()

    def triplet(self, style="x"):
        """
        Returns the operation as the coordinate triplet, e.g. 'x,-y,z+1/2'
        """
        return ",".join(
            make_triplet_part(*self.rot[i], self.tran[i], style=style) for i in range(3)
        )

    def det_rot(self):
        """
        Returns the determinant of the rotation matrix in units of DEN^3:
        DEN^3 for a rotation, -DEN^3 for a rotoinversion.
        """
        r = self.rot
        return (
            r[0][0] * (r[1][1] * r[2][2] - r[1][2] * r[2][1])
            - r[0][1] * (r[1][0] * r[2][2] - r[1][2] * r[2][0])
            + r[0][2] * (r[1][0] * r[2][1] - r[1][1] * r[2][0])
        )

    def inverse(self):
        """
        Returns the inverse operation, computed from the adjugate matrix.
        """
        detr = self.det_rot()
        if detr == 0:
            msg = "cannot invert matrix: " + Op(rot=self.rot).triplet()
            raise SingularMatrix(msg)
        r = self.rot
        d2 = DEN * DEN
        cof = (
            (
                r[1][1] * r[2][2] - r[2][1] * r[1][2],
                r[0][2] * r[2][1] - r[0][1] * r[2][2],
                r[0][1] * r[1][2] - r[0][2] * r[1][1],
            ),
            (
                r[1][2] * r[2][0] - r[1][0] * r[2][2],
                r[0][0] * r[2][2] - r[0][2] * r[2][0],
                r[1][0] * r[0][2] - r[0][0] * r[1][2],
            ),
            (
                r[1][0] * r[2][1] - r[2][0] * r[1][1],
                r[2][0] * r[0][1] - r[0][0] * r[2][1],
                r[0][0] * r[1][1] - r[1][0] * r[0][1],
            ),
        )
        rot = [[exact_div(d2 * c, detr) for c in row] for row in cof]
        tran = [
            exact_div(-sum(self.tran[j] * rot[i][j] for j in range(3)), DEN)
            for i in range(3)
        ]
        return Op(rot=rot, tran=tran)

    def wrap(self):
        """
        Returns the operation with the translation moved into [0, 1).
        """
        return Op(rot=self.rot, tran=[t % DEN for t in self.tran])

    def translated(self, a):
        return Op(rot=self.rot, tran=[t + v for t, v in zip(self.tran, a)])

    def add_centering(self, a):
        return self.translated(a).wrap()

    def negated_rot(self):
        return tuple(tuple(-v for v in row) for row in self.rot)

    def negated(self):
        return Op(rot=self.negated_rot(), tran=[-t for t in self.tran])

    def combine(self, b):
        """
        Composition of two operations (self after b), without wrapping.

        Args:
            b: Op applied first

        Returns:
            the combined Op
        """
        a = self.rot
        rot = [
            [exact_div(sum(a[i][k] * b.rot[k][j] for k in range(3)), DEN) for j in range(3)]
            for i in range(3)
        ]
        tran = [
            exact_div(self.tran[i] * DEN + sum(a[i][j] * b.tran[j] for j in range(3)), DEN)
            for i in range(3)
        ]
        return Op(rot=rot, tran=tran)

    def apply_to_hkl(self, hkl):
        """
        Transform Miller indices, i.e. (h, k, l) multiplied by the rotation.

        Args:
            hkl: three integers

        Returns:
            a list of three integers
        """
        r = self.rot
        return [
            exact_div(r[0][i] * hkl[0] + r[1][i] * hkl[1] + r[2][i] * hkl[2], DEN)
            for i in range(3)
        ]

    def apply_to_xyz(self, xyz):
        """
        Apply the operation to fractional coordinates.

        Args:
            xyz: a 1x3 (or Nx3) array of fractional coordinates

        Returns:
            numpy array of the transformed coordinates
        """
        m = self.float_seitz()
        xyz = np.asarray(xyz, dtype=float)
        return xyz.dot(m[:3, :3].T) + m[:3, 3]

    def phase_shift(self, h, k, l):
        """
        Returns the phase shift (in radians) that the operation introduces
        in the structure factor of the reflection (h, k, l).
        """
        mult = -2 * math.pi / DEN
        return mult * (h * self.tran[0] + k * self.tran[1] + l * self.tran[2])

    def int_seitz(self):
        """4x4 integer Seitz matrix, in units of 1/DEN"""
        t = np.zeros([4, 4], dtype=int)
        t[:3, :3] = self.rot
        t[:3, 3] = self.tran
        t[3, 3] = 1
        return t

    def float_seitz(self):
        """4x4 Seitz matrix of floats"""
        t = np.eye(4)
        t[:3, :3] = np.array(self.rot) / DEN
        t[:3, 3] = np.array(self.tran) / DEN
        return t

    def to_symmop(self):
        """
        Returns the operation as a pymatgen SymmOp object
        """
        m = self.float_seitz()
        return SymmOp.from_rotation_and_translation(m[:3, :3], m[:3, 3])

    @classmethod
    def from_symmop(cls, op, tol=1e-4):
        """
        Create the Op from a pymatgen SymmOp.

        Args:
            op: SymmOp object
            tol: tolerance for the conversion to multiples of 1/DEN

        Returns:
            the Op object
        """
        rot = np.array(op.rotation_matrix) * DEN
        tran = np.array(op.translation_vector) * DEN
        if not (np.allclose(rot, np.rint(rot), atol=tol) and np.allclose(tran, np.rint(tran), atol=tol)):
            raise ValueError(f"SymmOp cannot be expressed in units of 1/{DEN}:\n{op}")
        return cls(rot=np.rint(rot).astype(int).tolist(), tran=np.rint(tran).astype(int).tolist())

    def as_dict(self):
        return {
            "@module": type(self).__module__,
            "@class": type(self).__name__,
            "rot": [list(row) for row in self.rot],
            "tran": list(self.tran),
        }

    @classmethod
    def from_dict(cls, d):
        return cls(rot=d["rot"], tran=d["tran"])

    def __mul__(self, other):
        if isinstance(other, str):
            other = Op(other)
        if isinstance(other, Op):
            return self.combine(other).wrap()
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, str):
            return Op(other).combine(self).wrap()
        return NotImplemented

    def __eq__(self, other):
        if isinstance(other, str):
            other = Op(other)
        if isinstance(other, Op):
            return self.rot == other.rot and self.tran == other.tran
        return NotImplemented

    def __lt__(self, other):
        return (self.rot, self.tran) < (other.rot, other.tran)

    def __hash__(self):
        return hash((self.rot, self.tran))

    def __str__(self):
        return self.triplet()

    def __repr__(self):
        return f"<Op {self.triplet()}>"
