"""Atomic MV-effect algebras given by atoms and their orders."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Optional


class AtomicMVEffectAlgebra:
    """A finite MV-effect algebra: product of chains, atoms kept in given order.

    Elements are lists of multiplicities; ids use mixed radix with the
    first atom as the least significant digit.
    """

    def __init__(self, atom_ids: Iterable[int], atom_orders: Iterable[int]) -> None:
        self.atom_ids: tuple[int, ...] = tuple(atom_ids)
        self.atom_orders: tuple[int, ...] = tuple(atom_orders)
        if len(self.atom_ids) != len(self.atom_orders):
            raise ValueError("atom_ids and atom_orders must have the same length")
        if not self.atom_ids:
            raise ValueError("an algebra needs at least one atom")

    def __repr__(self) -> str:
        return (
            f"AtomicMVEffectAlgebra(atom_ids={list(self.atom_ids)}, "
            f"atom_orders={list(self.atom_orders)})"
        )

    def max_id(self) -> int:
        """Number of elements of the algebra."""
        return math.prod(order + 1 for order in self.atom_orders)

    def is_elem(self, elem: Optional[Sequence[int]]) -> bool:
        """Whether the multiplicities describe an element."""
        if elem is None or len(elem) != len(self.atom_orders):
            return False
        return all(0 <= value <= order for value, order in zip(elem, self.atom_orders))

    def is_less_or_equal(self, elem1: Sequence[int], elem2: Sequence[int]) -> bool:
        """Componentwise order of two elements."""
        return all(a <= b for a, b in zip(elem1, elem2))

    def are_summable(self, elem1: Sequence[int], elem2: Sequence[int]) -> bool:
        """Whether both are elements and their sum stays within the orders."""
        if not (self.is_elem(elem1) and self.is_elem(elem2)):
            return False
        return all(a + b <= order for a, b, order in zip(elem1, elem2, self.atom_orders))

    def are_summable_ids(self, id1: int, id2: int) -> bool:
        """Whether the elements with the given ids are summable."""
        elem1 = self.elem_from_id(id1)
        elem2 = self.elem_from_id(id2)
        if elem1 is None or elem2 is None:
            return False
        return self.are_summable(elem1, elem2)

    def oplus(self, elem1: Sequence[int], elem2: Sequence[int]) -> Optional[list[int]]:
        """Partial sum of two elements, or None when undefined."""
        if not self.are_summable(elem1, elem2):
            return None
        return [a + b for a, b in zip(elem1, elem2)]

    def oplus_ids(self, id1: int, id2: int) -> Optional[int]:
        """Id of the partial sum of two elements given by id, or None."""
        if not self.are_summable_ids(id1, id2):
            return None
        return self.get_id(self.oplus(self.elem_from_id(id1), self.elem_from_id(id2)))

    def get_id(self, elem: Optional[Sequence[int]]) -> Optional[int]:
        """Id of an element, or None if it is not an element."""
        if not self.is_elem(elem):
            return None
        value = 0
        for multiplicity, order in reversed(list(zip(elem, self.atom_orders))):
            value = value * (order + 1) + multiplicity
        return value

    def elem_from_id(self, elem_id: Optional[int]) -> Optional[list[int]]:
        """Multiplicities of the element with the given id, or None."""
        if elem_id is None or not 0 <= elem_id < self.max_id():
            return None
        result = []
        for order in self.atom_orders:
            elem_id, digit = divmod(elem_id, order + 1)
            result.append(digit)
        return result

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
            values = [-1] * len(self.atom_ids)
        parts = (f"{{{atom},{value}}}" for atom, value in zip(self.atom_ids, values))
        return "{" + ",".join(parts) + "}"

    def oplus_table(self) -> list[list[Optional[int]]]:
        """Table of partial sums by id; None marks an undefined sum."""
        ids = range(self.max_id())
        return [[self.oplus_ids(i, j) for j in ids] for i in ids]

    def format_oplus_table(self) -> str:
        """The partial-sum table as a brace-delimited initializer; -1 is undefined."""
        rows = []
        for row in self.oplus_table():
            cells = ", ".join(str(-1 if value is None else value) for value in row)
            rows.append("\t{" + cells + "}")
        return "{\n" + ",\n".join(rows) + "\n}\n"