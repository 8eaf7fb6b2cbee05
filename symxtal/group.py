"""
Module for groups of symmetry operations. A space group is stored as the
list of symmetry operations (sym_ops) and the list of centring vectors
(cen_ops); the full list of operations is their product.
"""
# Imports
# ------------------------------
# External Libraries
from monty.json import MSONable

# symxtal imports
from symxtal.constants import DEN, MAX_GROUP_ORDER, lattice_symbols
from symxtal.msg import GroupTooLarge, InvalidHallSymbol, printx
from symxtal.operations import Op


# ------------------------------
def centring_vectors(lattice_symbol):
    """
    Returns the centring vectors of the lattice.

    Args:
        lattice_symbol: one of P, A, B, C, I, R, S, T, H or F (any case)

    Returns:
        a list of translation vectors in units of 1/DEN
    """
    h = DEN // 2
    t = DEN // 3
    d = 2 * t
    vectors = {
        "P": [(0, 0, 0)],
        "A": [(0, 0, 0), (0, h, h)],
        "B": [(0, 0, 0), (h, 0, h)],
        "C": [(0, 0, 0), (h, h, 0)],
        "I": [(0, 0, 0), (h, h, h)],
        "R": [(0, 0, 0), (t, d, d), (d, t, t)],
        # hall_symbols.html has no H, SgInfo has no S and T
        "S": [(0, 0, 0), (t, t, d), (d, t, d)],
        "T": [(0, 0, 0), (t, d, t), (d, t, d)],
        "H": [(0, 0, 0), (t, d, 0), (d, t, 0)],
        "F": [(0, 0, 0), (0, h, h), (h, 0, h), (h, h, 0)],
    }
    try:
        return list(vectors[lattice_symbol.upper()])
    except KeyError:
        raise InvalidHallSymbol("not a lattice symbol: " + lattice_symbol, lattice_symbol) from None


class GroupOps(MSONable):
    """
    Class for the operations of a space group, stored as the symmetry
    operations (the first being identity) and the centring vectors (the
    first being the zero vector).

    Examples
    --------
    >>> from symxtal.hall import symops_from_hall
    >>> gops = symops_from_hall("-P 2ac 2n")
    >>> len(gops), gops.find_centering(), gops.is_centric()
    (8, 'P', True)

    Args:
        sym_ops: list of Op objects
        cen_ops: list of translation vectors in units of 1/DEN
    """

    def __init__(self, sym_ops=None, cen_ops=None):
        self.sym_ops = list(sym_ops) if sym_ops is not None else [Op.identity()]
        if cen_ops is None:
            cen_ops = [(0, 0, 0)]
        self.cen_ops = [tuple(c) for c in cen_ops]

    def order(self):
        return len(self.sym_ops) * len(self.cen_ops)

    def __len__(self):
        return self.order()

    def __iter__(self):
        for cen in self.cen_ops:
            for op in self.sym_ops:
                yield op.add_centering(cen)

    def get_op(self, n):
        """
        Returns the n-th operation; operations are ordered by centring vector
        first and by symmetry operation within each centring vector.
        """
        n_cen, n_sym = divmod(n, len(self.sym_ops))
        return self.sym_ops[n_sym].add_centering(self.cen_ops[n_cen])

    def __getitem__(self, index):
        if isinstance(index, tuple):
            n_sym, n_cen = index
            return self.sym_ops[n_sym].add_centering(self.cen_ops[n_cen])
        if index < 0:
            index += self.order()
        if not 0 <= index < self.order():
            raise IndexError("operation index out of range")
        return self.get_op(index)

    def find_by_rotation(self, rot):
        """
        Returns the index of the symmetry operation with the given rotation
        matrix, or None.
        """
        rot = tuple(tuple(row) for row in rot)
        for i, op in enumerate(self.sym_ops):
            if op.rot == rot:
                return i
        return None

    def is_centric(self):
        return self.find_by_rotation(Op.identity().negated_rot()) is not None

    def find_centering(self):
        """
        Returns the lattice symbol ('P', 'A', ..., 'F') that matches the
        centring vectors, or None for a non-standard centring.
        """
        trans = sorted(self.cen_ops)
        for c in lattice_symbols:
            if trans == sorted(centring_vectors(c)):
                return c
        return None

    def _check_size(self, ops):
        if len(ops) > MAX_GROUP_ORDER:
            raise GroupTooLarge(MAX_GROUP_ORDER)

    def add_missing_elements(self):
        """
        Complete sym_ops to the group generated by them, using the
        Dimino's algorithm. The centring vectors are not changed.

        Returns:
            self
        """
        identity = Op.identity()
        if not self.sym_ops or self.sym_ops[0] != identity:
            raise ValueError("the first operation in sym_ops must be the identity")
        if len(self.sym_ops) < 2:
            return self
        gen = self.sym_ops[1:]
        ops = self.sym_ops[:2]

        # the cyclic group generated by the first generator
        g = ops[1] * ops[1]
        while g.rot != identity.rot:
            ops.append(g)
            self._check_size(ops)
            g = g * ops[1]

        # add one generator at a time, with its cosets
        for i in range(1, len(gen)):
            coset_repr = [identity]
            init_size = len(ops)
            while True:
                len_ = len(coset_repr)
                for j in range(len_):
                    for n in range(i + 1):
                        sg = gen[n] * coset_repr[j]
                        if all(op.rot != sg.rot for op in ops):
                            ops.append(sg)
                            for k in range(1, init_size):
                                ops.append(sg * ops[k])
                            coset_repr.append(sg)
                if len_ == len(coset_repr):
                    break
                self._check_size(ops)
        printx(f"closure of {len(gen)} generators: {len(ops)} operations", priority=3)
        self.sym_ops = ops
        return self

    def change_basis(self, cob):
        """
        Transform the operations to a new basis: op' = cob * op * cob^-1.
        If the new cell is larger, the centring vectors are multiplied.

        Args:
            cob: Op with the change-of-basis transformation

        Returns:
            self
        """
        if not self.sym_ops:
            return self
        inv = cob.inverse()
        self.sym_ops[1:] = [cob.combine(op).combine(inv).wrap() for op in self.sym_ops[1:]]

        # if the volume increases, add the lattice translations of the old cell
        idet = inv.det_rot() // DEN**3
        if idet > 1:
            printx(f"change of basis enlarges the cell {idet} times", priority=3)
            new_cen = []
            for i in range(idet):
                for j in range(idet):
                    for k in range(idet):
                        for cen in self.cen_ops:
                            new_cen.append((i * DEN + cen[0], j * DEN + cen[1], k * DEN + cen[2]))
            self.cen_ops = new_cen

        identity_rot = Op.identity().rot
        for n in range(1, len(self.cen_ops)):
            op = cob.combine(Op(rot=identity_rot, tran=self.cen_ops[n])).combine(inv).wrap()
            self.cen_ops[n] = op.tran

        # remove duplicates
        unique = []
        for cen in self.cen_ops:
            if cen not in unique:
                unique.append(cen)
        self.cen_ops = unique
        return self

    def changed_basis(self, cob):
        """
        Returns a transformed copy, see change_basis()
        """
        return self.copy().change_basis(cob)

    def copy(self):
        return GroupOps(self.sym_ops, self.cen_ops)

    def all_ops_sorted(self):
        return sorted(self)

    def is_same_as(self, other):
        if len(self.cen_ops) != len(other.cen_ops) or len(self.sym_ops) != len(other.sym_ops):
            return False
        return self.all_ops_sorted() == other.all_ops_sorted()

    def __eq__(self, other):
        if not isinstance(other, GroupOps):
            return NotImplemented
        return self.is_same_as(other)

    __hash__ = None

    def find_grid_factors(self):
        """
        Returns the factors (one per axis) that the number of grid points
        must be a multiple of, to be compatible with the translations
        of all operations.
        """
        r = [DEN, DEN, DEN]
        for op in self:
            for i in range(3):
                if 0 < op.tran[i] < r[i]:
                    r[i] = op.tran[i]
        return [DEN // x for x in r]

    def are_directions_symmetry_related(self, u, v):
        """
        Check if the axis u is mapped onto the axis v (0, 1, 2 for a, b, c)
        by any of the symmetry operations.
        """
        return any(op.rot[u][v] != 0 for op in self.sym_ops)

    def triplets(self, style="x"):
        return [op.triplet(style) for op in self]

    def as_dict(self):
        return {
            "@module": type(self).__module__,
            "@class": type(self).__name__,
            "sym_ops": [op.triplet() for op in self.sym_ops],
            "cen_ops": [list(c) for c in self.cen_ops],
        }

    @classmethod
    def from_dict(cls, d):
        return cls([Op(s) for s in d["sym_ops"]], d["cen_ops"])

    def __str__(self):
        s = f"{len(self.cen_ops)} x {len(self.sym_ops)} symmetry operations:\n"
        s += "\n".join(self.triplets())
        return s

    def __repr__(self):
        return f"<GroupOps {len(self.cen_ops)} x {len(self.sym_ops)}>"


def split_centering_vectors(ops):
    """
    Create GroupOps from a flat list of operations. Operations with the
    identity rotation become centring vectors.

    Args:
        ops: a list of Op objects (or triplets)

    Returns:
        the GroupOps object
    """
    identity = Op.identity()
    sym_ops = [identity]
    cen_ops = []
    for op in ops:
        if isinstance(op, str):
            op = Op(op)
        op = op.wrap()
        idx = next((i for i, s in enumerate(sym_ops) if s.rot == op.rot), None)
        if idx is not None:
            if op.rot == identity.rot:
                cen_ops.append(op.tran)
            if op.tran == (0, 0, 0):
                sym_ops[idx] = op
        else:
            sym_ops.append(op)
    if (0, 0, 0) in cen_ops:
        cen_ops.remove((0, 0, 0))
    cen_ops.insert(0, (0, 0, 0))
    return GroupOps(sym_ops, cen_ops)
