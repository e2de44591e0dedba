"""Finite MV-algebra blocks: products of finite chains indexed by atoms."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Optional

Elem = list[int]
Annotated = list[tuple[int, int]]


class MVBlock:
    """A finite MV-effect algebra given as a product of chains, one per atom.

    Atoms are kept sorted by their identifier. An element is a list of
    multiplicities, one for each atom, and is numbered in mixed radix with
    the first atom as the least significant digit.
    """

    def __init__(self, ids: Iterable[int], orders: Iterable[int]) -> None:
        ids = list(ids)
        orders = list(orders)
        if len(ids) != len(orders):
            raise ValueError("ids and orders must have the same length")
        if not ids:
            raise ValueError("a block needs at least one atom")
        pairs = sorted(zip(ids, orders), key=lambda pair: pair[0])
        self.ids: tuple[int, ...] = tuple(atom for atom, _ in pairs)
        self.orders: tuple[int, ...] = tuple(order for _, order in pairs)
        self._max_id = math.prod(order + 1 for order in self.orders)

    @property
    def size(self) -> int:
        """Number of atoms in the block."""
        return len(self.ids)

    def __repr__(self) -> str:
        return f"MVBlock(ids={list(self.ids)}, orders={list(self.orders)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MVBlock):
            return NotImplemented
        return self.ids == other.ids and self.orders == other.orders

    def __hash__(self) -> int:
        return hash((self.ids, self.orders))

    def atom_order(self, atom_id: int) -> int:
        """Order of the given atom in this block, 0 if the atom is absent."""
        for atom, order in zip(self.ids, self.orders):
            if atom == atom_id:
                return order
        return 0

    def atom_index(self, atom_id: int) -> Optional[int]:
        """Position of the given atom in this block, or None if absent."""
        try:
            return self.ids.index(atom_id)
        except ValueError:
            return None

    def max_id(self) -> int:
        """Number of elements of the block (one past the largest id)."""
        return self._max_id

    def is_elem(self, elem: Optional[Sequence[int]]) -> bool:
        """Whether the multiplicities describe an element of this block."""
        if elem is None or len(elem) != self.size:
            return False
        return all(0 <= value <= order for value, order in zip(elem, self.orders))

    def is_less_or_equal(self, elem1: Sequence[int], elem2: Sequence[int]) -> bool:
        """Componentwise order of two elements."""
        return all(a <= b for a, b in zip(elem1, elem2))

    def are_leq(self, id1: Optional[int], id2: Optional[int]) -> bool:
        """Order of two elements given by their ids; False if an id is invalid."""
        elem1 = self.elem_from_id(id1)
        elem2 = self.elem_from_id(id2)
        if elem1 is None or elem2 is None:
            return False
        return self.is_less_or_equal(elem1, elem2)

    def get_id(self, elem: Optional[Sequence[int]]) -> Optional[int]:
        """Id of an element, or None if it is not an element of the block."""
        if not self.is_elem(elem):
            return None
        value = 0
        for multiplicity, order in reversed(list(zip(elem, self.orders))):
            value = value * (order + 1) + multiplicity
        return value

    def get_id_annotated(self, annotated: Iterable[tuple[int, int]]) -> Optional[int]:
        """Id of an element given as (atom id, multiplicity) pairs.

        The pairs may be unsorted; atoms left out count as 0 and atoms
        outside the block are ignored.
        """
        elem = [0] * self.size
        for atom, multiplicity in annotated:
            index = self.atom_index(atom)
            if index is not None:
                elem[index] = multiplicity
        return self.get_id(elem)

    def elem_from_id(self, elem_id: Optional[int]) -> Optional[Elem]:
        """Multiplicities of the element with the given id, or None."""
        if elem_id is None or not 0 <= elem_id < self._max_id:
            return None
        result = []
        for order in self.orders:
            elem_id, digit = divmod(elem_id, order + 1)
            result.append(digit)
        return result

    def annotated_elem_from_id(self, elem_id: Optional[int]) -> Optional[Annotated]:
        """The element with the given id as sorted (atom id, multiplicity) pairs."""
        elem = self.elem_from_id(elem_id)
        if elem is None:
            return None
        return list(zip(self.ids, elem))

    def format_elem(self, elem: Optional[Sequence[int]]) -> str:
        """Text form "{a,b,c}" of an element, "-1" if it is not one."""
        if not self.is_elem(elem):
            return "-1"
        return "{" + ",".join(str(value) for value in elem) + "}"

    def format_elem_with_ids(self, elem: Optional[Sequence[int]]) -> str:
        """Text form "{{atom,mult},...}"; multiplicities are -1 for a non-element."""
        if self.is_elem(elem):
            values = list(elem)
        else:
            values = [-1] * self.size
        parts = (f"{{{atom},{value}}}" for atom, value in zip(self.ids, values))
        return "{" + ",".join(parts) + "}"

    def format_annotated(self, annotated: Iterable[tuple[int, int]]) -> str:
        """Text form "[atom, mult],..." of annotated pairs."""
        return ",".join(f"[{atom}, {value}]" for atom, value in annotated)

    def orthosupplement(self, elem: Sequence[int]) -> Elem:
        """Orthosupplement: each multiplicity replaced by order minus it."""
        return [order - value for value, order in zip(elem, self.orders)]

    def orthosupplement_id(self, elem_id: Optional[int]) -> Optional[int]:
        """Id of the orthosupplement of the element with the given id."""
        elem = self.elem_from_id(elem_id)
        if elem is None:
            return None
        return self.get_id(self.orthosupplement(elem))

    def oplus(self, elem1: Sequence[int], elem2: Sequence[int]) -> Optional[Elem]:
        """Partial sum of two elements, or None when it is undefined."""
        result = []
        for a, b, order in zip(elem1, elem2, self.orders):
            value = a + b
            if value > order:
                return None
            result.append(value)
        return result