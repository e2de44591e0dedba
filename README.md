# effalg

Tools for computing with finite effect algebras.

- `effalg.mv_block.MVBlock` – a finite MV-effect algebra generated by atoms of
  given orders (a product of chains). Atoms are sorted by id; elements are
  lists of multiplicities and are numbered in mixed radix, with the first atom
  as the least significant digit. Provides the order, the partial sum
  (`oplus`), the orthosupplement and conversions between elements, ids and
  `(atom, multiplicity)` pairs.
- `effalg.atomic_mv.AtomicMVEffectAlgebra` – the same structure with atoms kept
  in the given order, plus `oplus_table()` and `format_oplus_table()`.
- `effalg.lattice_ea.LatticeEA` – a lattice effect algebra pasted from
  `MVBlock`s that share single atoms. Elements are named by `BlockElem`
  (block index, element id); `canonical()` gives each element's canonical
  name. Provides `are_same`, `are_leq`, `oplus`, `orthosupplement`, `inf`,
  `sup`, `impl` and `block_representation`. Undefined results are `None`.
- `effalg.lattice_ea_ops.LatticeEAOps` – numbers the canonical elements of a
  `LatticeEA` (0 is the bottom, the last index the top) and tabulates the
  order and all operations. Call `generate_ops()` once before any lookup; it
  can be slow for large algebras and takes an optional progress callback.
- `effalg.finite_ea` – effect algebras given by an explicit partial-sum table
  over elements `0..n-1`: the induced order, orthosupplement, infimum and
  supremum tables, the compatibility relation and blocks, an associativity
  check, and enumeration of filters, fantastic, implicative, positive
  implicative and strong filters of a `TableLatticeEA`.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
effalg
```

analyses every built-in example. For each it prints the induced order, the
orthosupplement, the infimum table, the blocks, the supremum table, the five
kinds of filters, the implication table, any violations of
`b <= (a->b)->b` and `b->a = ((a->b)->b)->a`, and whether the partial sum is
associative. If the order is not a lattice, the report says so.

Options:

- `--example NAME` – analyse only this example; may be repeated. Names:
  `3.12`, `3.13`, `3.14`, `3.15`, `3.15a`, `chajda`, `a2-b2`,
  `a2-b2=b2-c2`, `333`.
- `--file PATH` – read partial-sum tables from a text file and, for each one
  whose order is a lattice, report violations of
  `b->a <= ((a->b)->b)->a`. Cells are numbers or `.` for undefined. Lines
  starting with `Order` are skipped, a line starting with `Left` or `Right` is
  skipped along with the line after it, and blank lines are ignored. After
  each table's rows one further line is consumed as a separator.
- `--size N` – number of elements in the tables read by `--file` (default 11).
- `--atomic ORDERS` – print the partial-sum table of the atomic MV-effect
  algebra with the given comma-separated atom orders, e.g.
  `effalg --atomic 2,2,3`; `-1` marks an undefined sum.

## Library use

```python
from effalg.mv_block import MVBlock
from effalg.lattice_ea import LatticeEA
from effalg.lattice_ea_ops import LatticeEAOps

lea = LatticeEA([
    MVBlock([1, 5, 2], [1, 1, 1]),
    MVBlock([2, 6, 3], [1, 1, 1]),
    MVBlock([3, 7, 4], [1, 1, 1]),
    MVBlock([4, 8, 1], [1, 1, 1]),
])

ops = LatticeEAOps(lea)
ops.generate_ops()
print(len(ops))
print(ops.impl(1, 2))
```

With a partial-sum table given as a list of rows, where `None` marks an
undefined sum:

```python
from effalg import finite_ea

order = finite_ea.induced_order(oplus)
lea = finite_ea.TableLatticeEA(
    order,
    oplus,
    finite_ea.orthosupplement_table(oplus),
    finite_ea.infimum_table(order),
    finite_ea.supremum_table(order),
)
print(finite_ea.format_binary(order))
print(finite_ea.is_associative(oplus, None))
print(list(finite_ea.filters(lea, finite_ea.is_filter)))
```

`effalg.cli.analyse(title, oplus)` returns the full text report for a table and
also accepts `-1` for undefined entries.