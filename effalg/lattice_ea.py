"""Lattice effect algebras assembled from MV-blocks that share atoms."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Optional

from effalg.mv_block import MVBlock


@dataclass(frozen=True, order=True)
class BlockElem:
    """An element named by the index of its block and its id in that block."""

    block_id: int
    elem_id: int

    def __str__(self) -> str:
        width = len(str(max(self.block_id, self.elem_id, 0)).lstrip("0"))
        if width:
            return f"{{ {self.block_id:>{width}}, {self.elem_id:>{width}} }}"
        return f"{{ {self.block_id}, {self.elem_id} }}"


class LatticeEA:
    """A lattice effect algebra pasted from MV-blocks.

    Two blocks are glued along a single shared atom: its multiples and the
    complements of its multiples are identified. Every element has a
    canonical name, its first representation in block order; 0 is named in
    the first block and 1 in the last one. Undefined results are None.
    """

    def __init__(self, blocks: Iterable[MVBlock]) -> None:
        self.blocks: tuple[MVBlock, ...] = tuple(blocks)
        if not self.blocks:
            raise ValueError("a lattice effect algebra needs at least one block")

    def __repr__(self) -> str:
        return f"LatticeEA(blocks={list(self.blocks)!r})"

    def _top(self, block_id: int) -> int:
        return self.blocks[block_id].max_id() - 1

    @staticmethod
    def _atom_multiple(block: MVBlock, atom: int, multiplicity: int) -> Optional[int]:
        return block.get_id_annotated([(atom, multiplicity)])

    @staticmethod
    def _coatom_multiple(block: MVBlock, atom: int, multiplicity: int) -> Optional[int]:
        elem = list(block.orders)
        index = block.atom_index(atom)
        if index is None:
            return None
        elem[index] = multiplicity
        return block.get_id(elem)

    def mv_block(self, bel: BlockElem) -> MVBlock:
        """The block the element is named in."""
        return self.blocks[bel.block_id]

    def block_ids(self, atom_id: int) -> list[int]:
        """Indices of the blocks containing the atom."""
        return [index for index, block in enumerate(self.blocks) if atom_id in block.ids]

    def common_blocks(self, atom_ids: Sequence[int]) -> list[int]:
        """Indices of the blocks containing all the given atoms."""
        if not atom_ids:
            return []
        common = set(self.block_ids(atom_ids[0]))
        for atom in atom_ids[1:]:
            common &= set(self.block_ids(atom))
        return sorted(common)

    def is_elem(self, elem: Sequence[tuple[int, int]]) -> bool:
        """Whether (atom id, multiplicity) pairs describe an element.

        All atoms must lie in one block; several blocks are accepted only
        for a single atom. Each multiplicity must lie within its atom's order.
        """
        if not elem:
            return False
        block_ids = self.common_blocks([atom for atom, _ in elem])
        if not block_ids:
            return False
        if len(block_ids) >= 2 and len(elem) != 1:
            return False
        block = self.blocks[block_ids[0]]
        return all(0 <= value <= block.atom_order(atom) for atom, value in elem)

    def common_atom(self, block1_id: int, block2_id: int) -> Optional[int]:
        """The atom two blocks share, or None unless they share exactly one."""
        shared = set(self.blocks[block1_id].ids) & set(self.blocks[block2_id].ids)
        if len(shared) == 1:
            return shared.pop()
        return None

    def are_same(self, bel1: BlockElem, bel2: BlockElem) -> bool:
        """Whether two names denote the same element."""
        if bel1.elem_id == 0 and bel2.elem_id == 0:
            return True
        if bel1.elem_id == self._top(bel1.block_id) and bel2.elem_id == self._top(bel2.block_id):
            return True
        if bel1 == bel2:
            return True
        if bel1.block_id == bel2.block_id:
            return False
        atom = self.common_atom(bel1.block_id, bel2.block_id)
        if atom is None:
            return False
        block1 = self.blocks[bel1.block_id]
        block2 = self.blocks[bel2.block_id]
        atom_order = block1.atom_order(atom)
        for i in range(1, atom_order + 1):
            if (
                bel1.elem_id == self._atom_multiple(block1, atom, i)
                and bel2.elem_id == self._atom_multiple(block2, atom, i)
            ):
                return True
            if (
                bel1.elem_id == self._coatom_multiple(block1, atom, atom_order - i)
                and bel2.elem_id == self._coatom_multiple(block2, atom, atom_order - i)
            ):
                return True
        return False

    def are_leq_proto(self, bel1: BlockElem, bel2: BlockElem) -> bool:
        """Order of two elements named in one block or in blocks sharing an atom."""
        block1 = self.blocks[bel1.block_id]
        if bel1.block_id == bel2.block_id:
            return block1.are_leq(bel1.elem_id, bel2.elem_id)
        if bel1.elem_id == 0:
            return True
        if bel2.elem_id == self._top(bel2.block_id):
            return True
        atom = self.common_atom(bel1.block_id, bel2.block_id)
        if atom is None:
            return False
        block2 = self.blocks[bel2.block_id]
        atom_order = block1.atom_order(atom)
        for i in range(1, atom_order + 1):
            in1 = self._atom_multiple(block1, atom, i)
            in2 = self._atom_multiple(block2, atom, i)
            if (bel2.elem_id == in2 and block1.are_leq(bel1.elem_id, in1)) or (
                bel1.elem_id == in1 and block2.are_leq(in2, bel2.elem_id)
            ):
                return True
            co1 = self._coatom_multiple(block1, atom, atom_order - i)
            co2 = self._coatom_multiple(block2, atom, atom_order - i)
            if (bel2.elem_id == co2 and block1.are_leq(bel1.elem_id, co1)) or (
                bel1.elem_id == co1 and block2.are_leq(co2, bel2.elem_id)
            ):
                return True
        return False

    def _all_elems(self):
        for block_id, block in enumerate(self.blocks):
            for elem_id in range(block.max_id()):
                yield BlockElem(block_id, elem_id)

    def are_leq(self, bel1: BlockElem, bel2: BlockElem) -> bool:
        """Order of two elements, searching for representations in adjacent blocks."""
        if bel1.block_id == bel2.block_id or self.common_atom(bel1.block_id, bel2.block_id) is not None:
            return self.are_leq_proto(bel1, bel2)
        for rep1 in self._all_elems():
            if not self.are_same(rep1, bel1):
                continue
            for rep2 in self._all_elems():
                if not self.are_same(rep2, bel2):
                    continue
                if rep1.block_id == rep2.block_id or self.common_atom(rep1.block_id, rep2.block_id) is not None:
                    return self.are_leq_proto(rep1, rep2)
        return False

    def id_total(self, bel: BlockElem) -> int:
        """Flat index: the element's block size counted once per preceding block."""
        return bel.block_id * self.blocks[bel.block_id].max_id() + bel.elem_id

    def canonical(self, bel: BlockElem) -> BlockElem:
        """The canonical name of an element."""
        if bel.elem_id == 0:
            return BlockElem(0, 0)
        if bel.elem_id == self._top(bel.block_id):
            last = len(self.blocks) - 1
            return BlockElem(last, self._top(last))
        for block_id in range(bel.block_id):
            for elem_id in range(self.blocks[block_id].max_id()):
                candidate = BlockElem(block_id, elem_id)
                if self.are_same(candidate, bel):
                    return candidate
        return bel

    def is_canonical(self, bel: BlockElem) -> bool:
        """Whether the name is the element's canonical one."""
        return self.canonical(bel) == bel

    @cached_property
    def _canonical_elems(self) -> tuple[BlockElem, ...]:
        return tuple(bel for bel in self._all_elems() if self.is_canonical(bel))

    def _block_sum(self, block_id: int, elem_id1: int, elem_id2: int) -> Optional[BlockElem]:
        block = self.blocks[block_id]
        total = block.oplus(block.elem_from_id(elem_id1), block.elem_from_id(elem_id2))
        if total is None:
            return None
        return self.canonical(BlockElem(block_id, block.get_id(total)))

    def oplus(self, bel1: BlockElem, bel2: BlockElem) -> Optional[BlockElem]:
        """Partial sum of two elements, canonical, or None when undefined."""
        if bel1.elem_id == 0:
            return self.canonical(bel2)
        if bel2.elem_id == 0:
            return self.canonical(bel1)
        if bel1.block_id == bel2.block_id:
            return self._block_sum(bel1.block_id, bel1.elem_id, bel2.elem_id)
        b1 = self.canonical(bel1)
        b2 = self.canonical(bel2)
        if b1.block_id == b2.block_id:
            return self.oplus(b1, b2)
        if self.are_leq(b1, self.orthosupplement(b2)):
            b2_in_b1 = self.block_representation(b2, b1.block_id)
            b1_in_b2 = self.block_representation(b1, b2.block_id)
            if b2_in_b1 is not None:
                return self._block_sum(b1.block_id, b1.elem_id, b2_in_b1.elem_id)
            if b1_in_b2 is not None:
                return self._block_sum(b2.block_id, b1_in_b2.elem_id, b2.elem_id)
        return None

    def block_representation(self, bel: BlockElem, block_id: int) -> Optional[BlockElem]:
        """A name of the element within the given block, or None if it has none."""
        if bel.block_id == block_id:
            return bel
        if bel.elem_id == 0:
            return BlockElem(block_id, 0)
        if bel.elem_id == self._top(bel.block_id):
            return BlockElem(block_id, self._top(block_id))
        atom = self.common_atom(bel.block_id, block_id)
        if atom is None:
            return None
        block = self.blocks[block_id]
        index = block.atom_index(atom)
        order = block.orders[index]
        for i in range(1, order + 1):
            atoms = BlockElem(block_id, self._atom_multiple(block, atom, i))
            if self.are_same(bel, atoms):
                return atoms
            coatoms = BlockElem(block_id, self._coatom_multiple(block, atom, order - i))
            if self.are_same(bel, coatoms):
                return coatoms
        return None

    def orthosupplement(self, bel: BlockElem) -> BlockElem:
        """The canonical orthosupplement of an element."""
        block = self.mv_block(bel)
        return self.canonical(BlockElem(bel.block_id, block.orthosupplement_id(bel.elem_id)))

    def inf(self, bel1: BlockElem, bel2: BlockElem) -> Optional[BlockElem]:
        """Greatest common lower bound, or None if there is none."""
        bounds = [p for p in self._canonical_elems if self.are_leq(p, bel1) and self.are_leq(p, bel2)]
        if not bounds:
            return None
        best = bounds[0]
        for p in bounds[1:]:
            if self.are_leq(best, p):
                best = p
        if all(self.are_leq(p, best) for p in bounds):
            return best
        return None

    def sup(self, bel1: BlockElem, bel2: BlockElem) -> Optional[BlockElem]:
        """Least common upper bound, or None if there is none."""
        bounds = [p for p in self._canonical_elems if self.are_leq(bel1, p) and self.are_leq(bel2, p)]
        if not bounds:
            return None
        best = bounds[0]
        for p in bounds[1:]:
            if self.are_leq(p, best):
                best = p
        if all(self.are_leq(best, p) for p in bounds):
            return best
        return None

    def impl(self, bel1: BlockElem, bel2: BlockElem) -> Optional[BlockElem]:
        """Implication: the orthosupplement of the first plus the infimum of both."""
        meet = self.inf(bel1, bel2)
        if meet is None:
            return None
        return self.oplus(self.orthosupplement(bel1), meet)