"""
Module for interpreting Hall symbols, e.g. '-P 2ac 2n' or 'P 61 2 (0 0 -1)'.
See http://cci.lbl.gov/sginfo/hall_symbols.html for the notation.
"""
# Imports
# ------------------------------
# Standard libraries
import math

# symxtal imports
from symxtal.constants import DEN, hall_translations
from symxtal.group import GroupOps, centring_vectors
from symxtal.msg import InvalidHallSymbol, InvalidTriplet, SingularMatrix
from symxtal.operations import Op, parse_triplet

_BLANKS = " \t_"


def _skip_blank(s, i):
    while i < len(s) and s[i] in _BLANKS:
        i += 1
    return i


def _find_blank(s, i):
    while i < len(s) and s[i] not in _BLANKS:
        i += 1
    return i


def hall_rotation_z(N):
    """
    Returns the rotation matrix (in units of DEN) of the N-fold axis
    along z, or of the diagonal axes ', " and *.
    """
    d = DEN
    rotations = {
        1: ((d, 0, 0), (0, d, 0), (0, 0, d)),
        2: ((-d, 0, 0), (0, -d, 0), (0, 0, d)),
        3: ((0, -d, 0), (d, -d, 0), (0, 0, d)),
        4: ((0, -d, 0), (d, 0, 0), (0, 0, d)),
        6: ((d, -d, 0), (d, 0, 0), (0, 0, d)),
        "'": ((0, -d, 0), (-d, 0, 0), (0, 0, -d)),
        '"': ((0, d, 0), (d, 0, 0), (0, 0, -d)),
        "*": ((0, 0, d), (d, 0, 0), (0, d, 0)),
    }
    if N not in rotations:
        raise InvalidHallSymbol("incorrect axis definition", str(N))
    return rotations[N]


def hall_translation_from_symbol(symbol):
    """
    Returns the translation (in units of DEN) of the symbol a, b, c, n,
    u, v, w or d.
    """
    try:
        return hall_translations[symbol]
    except KeyError:
        raise InvalidHallSymbol(f"unknown symbol: {symbol}", symbol) from None


def _alter_order(r, i, j, k):
    return (
        (r[i][i], r[i][j], r[i][k]),
        (r[j][i], r[j][j], r[j][k]),
        (r[k][i], r[k][j], r[k][k]),
    )


def hall_matrix_symbol(symbol, pos, prev):
    """
    Parse a single matrix symbol of the Hall notation.

    Args:
        symbol: matrix symbol such as '2', '-4bd', '3*' or '61'
        pos: position of the symbol (1, 2 or 3) for implicit axes
        prev: the rotation order of the previous matrix symbol

    Returns:
        a tuple (Op, N) where N is the rotation order of this symbol
    """
    neg = symbol.startswith("-")
    p = 1 if neg else 0
    if p >= len(symbol) or symbol[p] not in "12346":
        raise InvalidHallSymbol("wrong n-fold order notation: " + symbol, symbol)
    N = int(symbol[p])
    fractional_tran = 0
    principal_axis = None
    diagonal_axis = None
    tran = [0, 0, 0]
    for c in symbol[p + 1:]:
        if c in "12345":
            if fractional_tran:
                raise InvalidHallSymbol("two numeric subscripts", symbol)
            fractional_tran = int(c)
        elif c in "'\"*":
            if N != (3 if c == "*" else 2):
                raise InvalidHallSymbol("wrong symbol: " + symbol, symbol)
            diagonal_axis = c
        elif c in "xyz":
            principal_axis = c
        else:
            tran = [t + v for t, v in zip(tran, hall_translation_from_symbol(c))]

    # the rules of implicit axes
    if principal_axis is None and diagonal_axis is None:
        if pos == 1:
            principal_axis = "z"
        elif pos == 2 and N == 2 and prev in (2, 4):
            principal_axis = "x"
        elif pos == 2 and N == 2 and prev in (3, 6):
            diagonal_axis = "'"
        elif pos == 3 and N == 3:
            diagonal_axis = "*"
        elif N != 1:
            raise InvalidHallSymbol("missing axis", symbol)

    rot = hall_rotation_z(diagonal_axis or N)
    if neg:
        rot = tuple(tuple(-v for v in row) for row in rot)
    if principal_axis == "x":
        rot = _alter_order(rot, 2, 0, 1)
    elif principal_axis == "y":
        rot = _alter_order(rot, 1, 2, 0)
    if fractional_tran:
        if principal_axis is None:
            raise InvalidHallSymbol("screw translation without principal axis", symbol)
        tran["xyz".index(principal_axis)] += DEN // N * fractional_tran
    return Op(rot=rot, tran=tran), N


def parse_hall_change_of_basis(text):
    """
    Parse the change-of-basis part of the Hall symbol, either a triplet
    ('-y+z,x+z,-x+y+z') or three integers in units of 1/12 ('0 0 -1').

    Returns:
        the Op object
    """
    if "," in text:
        try:
            return parse_triplet(text)
        except InvalidTriplet as err:
            raise InvalidHallSymbol(err.message, text) from err
    tokens = text.split()
    if len(tokens) != 3:
        raise InvalidHallSymbol("unexpected change-of-basis format: " + text, text)
    try:
        shifts = [int(t) for t in tokens]
    except ValueError:
        raise InvalidHallSymbol("unexpected change-of-basis format: " + text, text) from None
    # the remainder keeps the sign, as in '0 0 -1'
    tran = [int(math.fmod(n, 12)) * (DEN // 12) for n in shifts]
    return Op(tran=tran)


def generators_from_hall(hall):
    """
    Returns the generators encoded in the Hall symbol, without the
    operations that follow from them.

    Args:
        hall: Hall symbol, e.g. '-P 2ac 2n'

    Returns:
        the GroupOps object
    """
    i = _skip_blank(hall, 0)
    sym_ops = [Op.identity()]
    if hall[i:i + 1] == "-":
        sym_ops.append(Op.identity().negated())
        i = _skip_blank(hall, i + 1)
    if i >= len(hall):
        raise InvalidHallSymbol("not a Hall symbol: " + hall, hall)
    cen_ops = centring_vectors(hall[i])
    counter = 0
    prev = 0
    part = _skip_blank(hall, i + 1)
    while part < len(hall) and hall[part] != "(":
        space = _find_blank(hall, part)
        counter += 1
        symbol = hall[part:space]
        if symbol != "1":
            op, prev = hall_matrix_symbol(symbol, counter, prev)
            sym_ops.append(op)
        part = _skip_blank(hall, space)
    gops = GroupOps(sym_ops, cen_ops)
    if part < len(hall):
        rb = hall.find(")", part)
        if rb == -1:
            raise InvalidHallSymbol("missing ')': " + hall, hall)
        cob = parse_hall_change_of_basis(hall[part + 1:rb])
        try:
            gops.change_basis(cob)
        except (ArithmeticError, SingularMatrix) as err:
            raise InvalidHallSymbol(f"unsupported change of basis ({err}): " + hall, hall) from err
        if _skip_blank(hall, rb + 1) != len(hall):
            raise InvalidHallSymbol("unexpected characters after ')': " + hall, hall[rb + 1:])
    return gops


def symops_from_hall(hall):
    """
    Returns all the operations of the space group given by the Hall symbol.

    Args:
        hall: Hall symbol, e.g. 'P 61 2 (0 0 -1)'

    Returns:
        the GroupOps object
    """
    gops = generators_from_hall(hall)
    try:
        return gops.add_missing_elements()
    except ArithmeticError as err:
        # products of the generators are not exact in units of 1/DEN
        raise InvalidHallSymbol(f"unsupported change of basis ({err}): " + hall, hall) from err
