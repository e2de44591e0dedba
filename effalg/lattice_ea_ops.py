"""Precomputed operation tables over the canonical elements of a lattice EA."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from effalg.lattice_ea import BlockElem, LatticeEA


class LatticeEAOps:
    """Numbers the canonical elements of a lattice effect algebra and tabulates
    its order and operations.

    Indices follow block order, so 0 is the bottom element and the last
    index is the top. Undefined results are None. ``generate_ops`` must be
    called before any operation is looked up; for large algebras it is slow.
    """

    def __init__(self, lea: LatticeEA) -> None:
        self.lea = lea
        self._elems: tuple[BlockElem, ...] = tuple(
            bel
            for block_id, block in enumerate(lea.blocks)
            for bel in (BlockElem(block_id, elem_id) for elem_id in range(block.max_id()))
            if lea.is_canonical(bel)
        )
        self._index: dict[BlockElem, int] = {bel: idx for idx, bel in enumerate(self._elems)}
        self._order: Optional[list[list[bool]]] = None
        self._oplus: Optional[list[list[Optional[int]]]] = None
        self._inf: Optional[list[list[Optional[int]]]] = None
        self._sup: Optional[list[list[Optional[int]]]] = None
        self._orthosupplement: Optional[list[Optional[int]]] = None

    def __len__(self) -> int:
        return len(self._elems)

    def __repr__(self) -> str:
        return f"LatticeEAOps(size={len(self)}, generated={self._order is not None})"

    def idx_to_elem(self, idx: Optional[int]) -> Optional[BlockElem]:
        """Canonical element with the given index; None maps to None."""
        if idx is None:
            return None
        if not 0 <= idx < len(self._elems):
            raise IndexError(f"element index {idx} out of range")
        return self._elems[idx]

    def elem_to_idx(self, elem: Optional[BlockElem]) -> Optional[int]:
        """Index of a canonical element; None maps to None."""
        if elem is None:
            return None
        try:
            return self._index[elem]
        except KeyError:
            raise KeyError(f"{elem} is not a canonical element") from None

    def generate_ops(self, progress: Optional[Callable[[int], None]] = None) -> None:
        """Compute all tables; ``progress`` is called with each finished row."""
        lea = self.lea
        elems = self._elems
        size = len(elems)
        leq = [[lea.are_leq(a, b) for b in elems] for a in elems]

        order = [[False] * size for _ in range(size)]
        inf: list[list[Optional[int]]] = [[None] * size for _ in range(size)]
        sup: list[list[Optional[int]]] = [[None] * size for _ in range(size)]
        oplus: list[list[Optional[int]]] = [[None] * size for _ in range(size)]
        orthosupplement: list[Optional[int]] = []

        for i in range(size):
            for j in range(i, size):
                if i == j:
                    order[i][i] = True
                elif leq[i][j]:
                    order[i][j], order[j][i] = True, False
                elif leq[j][i]:
                    order[i][j], order[j][i] = False, True
                inf[i][j] = inf[j][i] = self._meet(leq, i, j)
                sup[i][j] = sup[j][i] = self._join(leq, i, j)
                total = self.elem_to_idx(lea.oplus(elems[i], elems[j]))
                oplus[i][j] = oplus[j][i] = total
            orthosupplement.append(self.elem_to_idx(lea.orthosupplement(elems[i])))
            if progress is not None:
                progress(i)

        self._order = order
        self._inf = inf
        self._sup = sup
        self._oplus = oplus
        self._orthosupplement = orthosupplement

    @staticmethod
    def _meet(leq: list[list[bool]], i: int, j: int) -> Optional[int]:
        bounds = [p for p in range(len(leq)) if leq[p][i] and leq[p][j]]
        if not bounds:
            return None
        best = bounds[0]
        for p in bounds[1:]:
            if leq[best][p]:
                best = p
        return best if all(leq[p][best] for p in bounds) else None

    @staticmethod
    def _join(leq: list[list[bool]], i: int, j: int) -> Optional[int]:
        bounds = [p for p in range(len(leq)) if leq[i][p] and leq[j][p]]
        if not bounds:
            return None
        best = bounds[0]
        for p in bounds[1:]:
            if leq[p][best]:
                best = p
        return best if all(leq[best][p] for p in bounds) else None

    def _require(self) -> None:
        if self._order is None:
            raise RuntimeError("generate_ops() must be called before using the operations")

    def order(self, el1: int, el2: int) -> bool:
        """Whether el1 is less than or equal to el2."""
        self._require()
        return self._order[el1][el2]

    def oplus(self, el1: Optional[int], el2: Optional[int]) -> Optional[int]:
        """Partial sum, or None when undefined."""
        self._require()
        if el1 is None or el2 is None:
            return None
        return self._oplus[el1][el2]

    def orthosupplement(self, el: Optional[int]) -> Optional[int]:
        """Orthosupplement of an element."""
        self._require()
        if el is None:
            return None
        return self._orthosupplement[el]

    def inf(self, el1: Optional[int], el2: Optional[int]) -> Optional[int]:
        """Infimum, or None if it does not exist."""
        self._require()
        if el1 is None or el2 is None:
            return None
        return self._inf[el1][el2]

    def sup(self, el1: Optional[int], el2: Optional[int]) -> Optional[int]:
        """Supremum, or None if it does not exist."""
        self._require()
        if el1 is None or el2 is None:
            return None
        return self._sup[el1][el2]

    def impl(self, el1: Optional[int], el2: Optional[int]) -> Optional[int]:
        """Implication: orthosupplement of el1 plus the infimum of both."""
        self._require()
        if el1 is None or el2 is None:
            return None
        return self.oplus(self.orthosupplement(el1), self.inf(el1, el2))