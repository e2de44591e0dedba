"""Finite effect algebras given by a partial-sum table over elements 0..n-1.

Element 0 is the bottom and element n-1 the top. Undefined table entries are
None unless a function says otherwise. Order relations are square tables of
truth values with ``order[a][b]`` meaning a <= b.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Container, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

Table = Sequence[Sequence[Optional[int]]]
Relation = Sequence[Sequence[Any]]


@dataclass(frozen=True)
class TableLatticeEA:
    """A finite lattice effect algebra stored as explicit tables."""

    order: Relation
    oplus: Table
    orthosupplement: Sequence[Optional[int]]
    inf: Table
    sup: Table

    @property
    def size(self) -> int:
        """Number of elements."""
        return len(self.order)

    def impl(self, a: Optional[int], b: Optional[int]) -> Optional[int]:
        """Implication a -> b: the orthosupplement of a plus the infimum of a and b."""
        if a is None or b is None:
            return None
        complement = self.orthosupplement[a]
        meet = self.inf[a][b]
        if complement is None or meet is None:
            return None
        return self.oplus[complement][meet]


def _associativity_violation(op: Table, undefined: Any) -> Optional[str]:
    n = len(op)
    for i, j, k in itertools.product(range(n), repeat=3):
        ij = op[i][j]
        jk = op[j][k]
        left = op[ij][k] if ij != undefined else undefined
        right = op[i][jk] if jk != undefined else undefined

        if ij != undefined and left != undefined:
            if jk == undefined:
                return f"->: ((j = {j}) + (k = {k})) undefined."
            if right == undefined:
                return f"->: i = {i} + (j = {j} + k = {k}) undefined."
            if left != right:
                return f"->: (i = {i} + j = {j}) + k = {k} != i + (j + k)."

        if jk != undefined and right != undefined:
            if ij == undefined:
                return f"<-: i = {i} + j = {j} undefined."
            if left == undefined:
                return f"<-: (i = {i} + j = {j}) + k = {k} undefined."
            if left != right:
                return f"->: (i = {i} + j = {j}) + k = {k} != i + (j + k)."
    return None


def is_associative(op: Table, undefined: Any = None) -> bool:
    """Whether a partial operation is associative in the effect-algebra sense.

    One side of (i+j)+k = i+(j+k) being defined forces the other to be
    defined and equal. ``undefined`` is the marker of undefined entries.
    """
    violation = _associativity_violation(op, undefined)
    if violation is not None:
        logger.debug("not associative %s", violation)
        return False
    return True


def get_inf(order: Relation, a: int, b: int) -> Optional[int]:
    """Infimum of a and b in the order, or None if it does not exist."""
    candidates = [i for i in range(len(order)) if order[i][a] and order[i][b]]
    best = 0
    for i in candidates:
        if order[best][i]:
            best = i
    if any(not order[i][best] for i in candidates):
        return None
    return best


def get_sup(order: Relation, a: int, b: int) -> Optional[int]:
    """Supremum of a and b in the order, or None if it does not exist."""
    candidates = [i for i in range(len(order)) if order[a][i] and order[b][i]]
    best = len(order) - 1
    for i in candidates:
        if order[i][best]:
            best = i
    if any(not order[best][i] for i in candidates):
        return None
    return best


def is_compatible(order: Relation, oplus: Table, a: int, b: int) -> bool:
    """Whether a and b are compatible: a v b = a + (b - (a ^ b))."""
    meet = get_inf(order, a, b)
    join = get_sup(order, a, b)
    if meet is None or join is None:
        return False
    minus = None
    for i, row in enumerate(oplus):
        if row[meet] == b:
            minus = i
    if minus is None:
        return False
    return join == oplus[a][minus]


def induced_order(oplus: Table) -> list[list[bool]]:
    """The order a <= b iff b = a + c for some c."""
    return [[i == j or j in row for j in range(len(oplus))] for i, row in enumerate(oplus)]


def orthosupplement_table(oplus: Table) -> list[Optional[int]]:
    """For each a, the element a' with a + a' = top (None if there is none)."""
    top = len(oplus) - 1
    result: list[Optional[int]] = []
    for row in oplus:
        complement = None
        for j, value in enumerate(row):
            if value == top:
                complement = j
        result.append(complement)
    return result


def compatibility_relation(order: Relation, oplus: Table) -> list[list[bool]]:
    """Table of pairwise compatibility of all elements."""
    n = len(order)
    return [[is_compatible(order, oplus, a, b) for b in range(n)] for a in range(n)]


def infimum_table(order: Relation) -> list[list[Optional[int]]]:
    """Table of infima; None where an infimum does not exist."""
    n = len(order)
    return [[get_inf(order, a, b) for b in range(n)] for a in range(n)]


def supremum_table(order: Relation) -> list[list[Optional[int]]]:
    """Table of suprema; None where a supremum does not exist."""
    n = len(order)
    return [[get_sup(order, a, b) for b in range(n)] for a in range(n)]


def blocks(compatibility: Relation) -> Iterator[tuple[int, ...]]:
    """Maximal sets of mutually compatible elements that contain 0 and the top."""
    n = len(compatibility)
    if n < 2:
        raise ValueError("blocks need at least two elements")
    inner = range(1, n - 1)
    for bits in itertools.product((False, True), repeat=n - 2):
        subset = [0, *(i for i, bit in zip(inner, bits) if bit), n - 1]
        if not all(compatibility[i][j] for i in subset for j in subset):
            continue
        members = set(subset)
        extendable = any(
            i not in members and all(compatibility[s][i] for s in subset) for i in inner
        )
        if not extendable:
            yield tuple(subset)


def is_filter(lea: TableLatticeEA, subset: Container[int]) -> bool:
    """Whether a in F and a -> b in F imply b in F."""
    n = lea.size
    for i in range(n):
        if i not in subset:
            continue
        for j in range(n):
            value = lea.impl(i, j)
            if value is None:
                return False
            if value in subset and j not in subset:
                return False
    return True


def is_fantastic(lea: TableLatticeEA, subset: Container[int]) -> bool:
    """Whether c -> (b -> a) in F implies ((a -> b) -> b) -> a in F for c in F."""
    n = lea.size
    for c in range(n):
        if c not in subset:
            continue
        for a, b in itertools.product(range(n), repeat=2):
            ba = lea.impl(b, a)
            if ba is None:
                return False
            ab = lea.impl(a, b)
            abb = lea.impl(ab, b)
            abba = lea.impl(abb, a)
            if ab is None or abb is None or abba is None:
                return False
            if lea.impl(c, ba) in subset and abba not in subset:
                return False
    return True


def is_implicative(lea: TableLatticeEA, subset: Container[int]) -> bool:
    """Whether a -> b in F and a -> (b -> c) in F imply a -> c in F."""
    n = lea.size
    for a, b in itertools.product(range(n), repeat=2):
        ab = lea.impl(a, b)
        if ab is None:
            return False
        if ab not in subset:
            continue
        for c in range(n):
            bc = lea.impl(b, c)
            abc = lea.impl(a, bc)
            ac = lea.impl(a, c)
            if bc is None or abc is None or ac is None:
                return False
            if abc in subset and ac not in subset:
                return False
    return True


def is_positive_implicative(lea: TableLatticeEA, subset: Container[int]) -> bool:
    """Whether a in F and a -> ((b -> c) -> b) in F imply b in F."""
    n = lea.size
    for a in range(n):
        if a not in subset:
            continue
        for b, c in itertools.product(range(n), repeat=2):
            value = lea.impl(a, lea.impl(lea.impl(b, c), b))
            if value in subset and b not in subset:
                return False
    return True


def is_strong(lea: TableLatticeEA, subset: Container[int]) -> bool:
    """Whether the set is a filter with b -> a in F for all a in F and all b."""
    if not is_filter(lea, subset):
        return False
    n = lea.size
    for a in range(n):
        if a not in subset:
            continue
        if any(lea.impl(b, a) not in subset for b in range(n)):
            return False
    return True


def filters(
    lea: TableLatticeEA,
    predicate: Callable[[TableLatticeEA, Container[int]], bool],
) -> Iterator[tuple[int, ...]]:
    """All sets containing the top that satisfy the predicate, as sorted tuples."""
    n = lea.size
    if n < 1:
        raise ValueError("the algebra has no elements")
    top = n - 1
    for bits in itertools.product((False, True), repeat=n - 1):
        subset = frozenset(i for i, bit in enumerate(bits) if bit) | {top}
        if predicate(lea, subset):
            yield tuple(sorted(subset))


def _cell(value: Any) -> int:
    return -1 if value is None else int(value)


def format_binary(op: Relation) -> str:
    """Text form of a square table; undefined entries are shown as -1."""
    return "".join(
        "".join(f"{_cell(value):>3}, " for value in row) + "\n" for row in op
    )


def format_unary(op: Sequence[Any]) -> str:
    """Text form of a unary operation on one line; undefined shown as -1."""
    return "".join(f"{_cell(value):>2}, " for value in op) + "\n"


def format_impl(lea: TableLatticeEA) -> str:
    """Text form of the implication table."""
    n = lea.size
    return format_binary([[lea.impl(a, b) for b in range(n)] for a in range(n)])