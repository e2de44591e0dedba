"""Command-line analysis of finite effect algebras given by partial-sum tables."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Iterable, Iterator, Sequence
from typing import Optional

from effalg.atomic_mv import AtomicMVEffectAlgebra
from effalg.finite_ea import (
    TableLatticeEA,
    blocks,
    compatibility_relation,
    filters,
    format_binary,
    format_impl,
    format_unary,
    induced_order,
    infimum_table,
    is_associative,
    is_fantastic,
    is_filter,
    is_implicative,
    is_positive_implicative,
    is_strong,
    orthosupplement_table,
    supremum_table,
)

Table = list[list[Optional[int]]]

_ = -1

EXAMPLES: dict[str, tuple[str, list[list[int]]]] = {
    "3.12": (
        "Example 3.12:\n",
        [
            [0, 1, 2, 3, 4, 5, 6, 7, 8, 9],
            [1, 3, 4, _, 9, _, _, _, _, _],
            [2, 4, _, 9, _, 6, _, 8, _, _],
            [3, _, 9, _, _, _, _, _, _, _],
            [4, 9, _, _, _, _, _, _, _, _],
            [5, _, 6, _, _, _, _, 3, 9, _],
            [6, _, _, _, _, _, _, 9, _, _],
            [7, _, 8, _, _, 3, 9, _, _, _],
            [8, _, _, _, _, 9, _, _, _, _],
            [9, _, _, _, _, _, _, _, _, _],
        ],
    ),
    "3.13": (
        "Example 3.13:\n",
        [
            [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13],
            [1, 2, _, 4, 13, _, _, _, _, _, _, _, _, _],
            [2, _, _, 13, _, _, _, _, _, _, _, _, _, _],
            [3, 4, 13, _, _, 6, _, 8, _, _, _, _, _, _],
            [4, 13, _, _, _, _, _, _, _, _, _, _, _, _],
            [5, _, _, 6, _, _, _, 2, 13, _, _, _, _, _],
            [6, _, _, _, _, _, _, 13, _, _, _, _, _, _],
            [7, _, _, 8, _, 2, 13, _, _, 10, _, 12, _, _],
            [8, _, _, _, _, 13, _, _, _, _, _, _, _, _],
            [9, _, _, _, _, _, _, 10, _, _, _, 6, 13, _],
            [10, _, _, _, _, _, _, _, _, _, _, 13, _, _],
            [11, _, _, _, _, _, _, 12, _, 6, 13, _, _, _],
            [12, _, _, _, _, _, _, _, _, 13, _, _, _, _],
            [13, _, _, _, _, _, _, _, _, _, _, _, _, _],
        ],
    ),
    "3.14": (
        "Example 3.14:\n",
        [
            [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 17],
            [1, 2, _, 4, 17, _, _, _, _, _, _, _, _, _, _, _, _, _],
            [2, _, _, 17, _, _, _, _, _, _, _, _, _, _, _, _, _, _],
            [3, 4, 17, _, _, 6, _, 8, _, _, _, _, _, _, _, _, _, _],
            [4, 17, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _],
            [5, _, _, 6, _, _, _, 2, 17, _, _, _, _, _, _, _, _, _],
            [6, _, _, _, _, _, _, 17, _, _, _, _, _, _, _, _, _, _],
            [7, _, _, 8, _, 2, 17, _, _, 10, _, 12, _, 15, 16, _, _, _],
            [8, _, _, _, _, 17, _, _, _, _, _, _, _, _, _, _, _, _],
            [9, _, _, _, _, _, _, 10, _, _, _, 6, 17, _, _, _, _, _],
            [10, _, _, _, _, _, _, _, _, _, _, 17, _, _, _, _, _, _],
            [11, _, _, _, _, _, _, 12, _, 6, 17, _, _, 14, _, 16, _, _],
            [12, _, _, _, _, _, _, _, _, 17, _, _, _, 16, _, _, _, _],
            [13, _, _, _, _, _, _, 15, _, _, _, 14, 16, 9, 6, 10, 17, _],
            [14, _, _, _, _, _, _, 16, _, _, _, _, _, 6, _, 17, _, _],
            [15, _, _, _, _, _, _, _, _, _, _, 16, _, 10, 17, _, _, _],
            [16, _, _, _, _, _, _, _, _, _, _, _, _, 17, _, _, _, _],
            [17, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _],
        ],
    ),
    "3.15": (
        "Example 3.15:\n",
        [
            [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 17],
            [1, 2, _, 4, 17, _, _, _, _, _, _, _, _, _, _, _, _, _],
            [2, _, _, 17, _, _, _, _, _, _, _, _, _, _, _, _, _, _],
            [3, 4, 17, _, _, 6, _, 8, _, _, _, _, _, _, 13, _, 15, _],
            [4, 17, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _],
            [5, _, _, 6, _, _, _, 2, 17, _, _, _, _, _, _, _, _, _],
            [6, _, _, _, _, _, _, 17, _, _, _, _, _, _, _, _, _, _],
            [7, _, _, 8, _, 2, 17, 14, 13, 10, _, 12, _, _, _, 6, 5, _],
            [8, _, _, _, _, 17, _, 13, _, _, _, _, _, _, _, _, 6, _],
            [9, _, _, _, _, _, _, 10, _, _, _, 6, 17, _, _, _, _, _],
            [10, _, _, _, _, _, _, _, _, _, _, 17, _, _, _, _, _, _],
            [11, _, _, _, _, _, _, 12, _, 6, 17, _, _, _, _, _, _, _],
            [12, _, _, _, _, _, _, _, _, 17, _, _, _, _, _, _, _, _],
            [13, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _, 17, _],
            [14, _, _, 13, _, _, _, _, _, _, _, _, _, _, _, 17, 2, _],
            [15, _, _, _, _, _, _, 6, _, _, _, _, _, _, 17, _, _, _],
            [16, _, _, 15, _, _, _, 5, 6, _, _, _, _, 17, 2, _, _, _],
            [17, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _, _],
        ],
    ),
    "3.15a": (
        "Example 3.15a:\n",
        [
            [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13],
            [1, 2, _, 4, 13, _, _, _, _, _, _, _, _, _],
            [2, _, _, 13, _, _, _, _, _, _, _, _, _, _],
            [3, 4, 13, _, _, 6, _, 8, _, _, 9, _, 11, _],
            [4, 13, _, _, _, _, _, _, _, _, _, _, _, _],
            [5, _, _, 6, _, _, _, 2, 13, _, _, _, _, _],
            [6, _, _, _, _, _, _, 13, _, _, _, _, _, _],
            [7, _, _, 8, _, 2, 13, 10, 9, _, _, 6, 5, _],
            [8, _, _, _, _, 13, _, 9, _, _, _, _, 6, _],
            [9, _, _, _, _, _, _, _, _, _, _, _, 13, _],
            [10, _, _, 9, _, _, _, _, _, _, _, 13, 2, _],
            [11, _, _, _, _, _, _, 6, _, _, 13, _, _, _],
            [12, _, _, 11, _, _, _, 5, 6, 13, 2, _, _, _],
            [13, _, _, _, _, _, _, _, _, _, _, _, _, _],
        ],
    ),
    "chajda": (
        "Example Chajda:\n",
        [
            [0, 1, 2, 3, 4, 5, 6, 7],
            [1, 5, 4, _, 7, _, _, _],
            [2, 4, _, 6, _, 7, _, _],
            [3, _, 6, 5, _, _, 7, _],
            [4, 7, _, _, _, _, _, _],
            [5, _, 7, _, _, _, _, _],
            [6, _, _, 7, _, _, _, _],
            [7, _, _, _, _, _, _, _],
        ],
    ),
    "a2-b2": (
        "Example a2-b2:\n",
        [
            [0, 1, 2, 3, 4, 5, 6, 7, 8],
            [1, 4, 3, 6, _, 7, _, 8, _],
            [2, 3, 5, 7, 6, _, 8, _, _],
            [3, 6, 7, 8, _, _, _, _, _],
            [4, _, 6, _, _, 8, _, _, _],
            [5, 7, _, _, 8, _, _, _, _],
            [6, _, 8, _, _, _, _, _, _],
            [7, 8, _, _, _, _, _, _, _],
            [8, _, _, _, _, _, _, _, _],
        ],
    ),
    "a2-b2=b2-c2": (
        "Example a2-b2=b2-c2:\n",
        [
            [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11],
            [1, 4, 6, _, _, 9, 8, _, _, 11, _, _],
            [2, 6, 5, 7, 8, _, 9, 10, 11, _, _, _],
            [3, _, 7, 4, _, 10, _, 8, _, _, 11, _],
            [4, _, 8, _, _, 11, _, _, _, _, _, _],
            [5, 9, _, 10, 11, _, _, _, _, _, _, _],
            [6, 8, 9, _, _, _, 11, _, _, _, _, _],
            [7, _, 10, 8, _, _, _, 11, _, _, _, _],
            [8, _, 11, _, _, _, _, _, _, _, _, _],
            [9, 11, _, _, _, _, _, _, _, _, _, _],
            [10, _, _, 11, _, _, _, _, _, _, _, _],
            [11, _, _, _, _, _, _, _, _, _, _, _],
        ],
    ),
    "333": (
        "test",
        [
            [0, 1, 2, 3, 4, 5, 6, 7, 8],
            [1, 2, _, 4, 5, _, 7, 8, _],
            [2, _, _, 5, _, _, 8, _, _],
            [3, 4, 5, 6, 7, 8, _, _, _],
            [4, 5, _, 7, 8, _, _, _, _],
            [5, _, _, 8, _, _, _, _, _],
            [6, 7, 8, _, _, _, _, _, _],
            [7, 8, _, _, _, _, _, _, _],
            [8, _, _, _, _, _, _, _, _],
        ],
    ),
}

del _

_FILTER_KINDS = (
    ("Filters: \n", is_filter),
    ("Fantastic filters: \n", is_fantastic),
    ("Implicative filters: \n", is_implicative),
    ("Positive implicative filters: \n", is_positive_implicative),
    ("Strong filters: \n", is_strong),
)

_CELL = re.compile(r"[ \t]*(?:(\.)|(\d+))?")


def _normalise(oplus: Sequence[Sequence[Optional[int]]]) -> Table:
    """Copy a table, turning the -1 marker into None."""
    return [[None if value is None or value == -1 else value for value in row] for row in oplus]


def _has_gap(table: Table) -> bool:
    return any(value is None for row in table for value in row)


def _format_subset(subset: Iterable[int]) -> str:
    return "".join(f"{i}, " for i in subset) + "\n"


def _cell(value: Optional[int]) -> int:
    return -1 if value is None else value


def _triple_impl(lea: TableLatticeEA, a: int, b: int) -> Optional[int]:
    """((a -> b) -> b) -> a, or None when any step is undefined."""
    ab = lea.impl(a, b)
    if ab is None:
        return None
    abb = lea.impl(ab, b)
    if abb is None:
        return None
    return lea.impl(abb, a)


def analyse(title: str, oplus: Sequence[Sequence[Optional[int]]], do_all: bool = True) -> str:
    """Full report on an effect algebra: order, lattice operations, blocks,
    filters of each kind, the implication table and two identity checks.

    Undefined entries may be None or -1. When the order is not a lattice the
    report says so and, unless ``do_all``, stops there.
    """
    table = _normalise(oplus)
    n = len(table)
    order = induced_order(table)
    orthosupplement = orthosupplement_table(table)
    parts = [title, " Order: \n", format_binary(order), "Orthosupplement: ", format_unary(orthosupplement)]

    inf = infimum_table(order)
    if _has_gap(inf):
        parts.append("No lattice - inf!\n")
        if not do_all:
            return "".join(parts)
    parts += ["Inf: \n", format_binary(inf), "--\n"]

    sup = supremum_table(order)
    if _has_gap(sup):
        parts.append("No lattice - sup!\n")
        if not do_all:
            return "".join(parts)

    parts.append("Blocks: \n")
    parts.extend(_format_subset(block) for block in blocks(compatibility_relation(order, table)))
    parts += ["Sup: \n", format_binary(sup)]

    lea = TableLatticeEA(order, table, orthosupplement, inf, sup)
    for heading, predicate in _FILTER_KINDS:
        parts.append(heading)
        parts.extend(_format_subset(subset) for subset in filters(lea, predicate))
    parts += ["--\n", format_impl(lea)]

    for a in range(n):
        for b in range(n):
            ab = lea.impl(a, b)
            val = lea.impl(ab, b)
            if ab is None or val is None:
                break
            if not order[b][val]:
                parts.append(f"b !<=! (a->b)->b: a = {a}, b = {b}, (a->b)->b = {val}\n")

    for a in range(n):
        for b in range(n):
            val = _triple_impl(lea, a, b)
            if val is None:
                break
            val2 = lea.impl(b, a)
            if val != val2:
                parts.append(
                    f"b->a !<=! ((a->b)->b)->a: a = {a}, b = {b}, "
                    f"b->a = {_cell(val2)}, ((a->b)->b)->a = {val}\n"
                )
    return "".join(parts)


def check_identity(title: str, oplus: Sequence[Sequence[Optional[int]]]) -> str:
    """Check b -> a <= ((a -> b) -> b) -> a in a lattice effect algebra.

    Returns the title followed by one line per violation, or an empty string
    when the induced order is not a lattice.
    """
    table = _normalise(oplus)
    n = len(table)
    order = induced_order(table)
    orthosupplement = orthosupplement_table(table)
    inf = infimum_table(order)
    if _has_gap(inf):
        return ""
    sup = supremum_table(order)
    if _has_gap(sup):
        return ""
    lea = TableLatticeEA(order, table, orthosupplement, inf, sup)

    parts = [title]
    for a in range(n):
        for b in range(n):
            val = _triple_impl(lea, a, b)
            if val is None:
                break
            val2 = lea.impl(b, a)
            if val2 is None or not order[val2][val]:
                parts.append(
                    f"b->a !<=! ((a->b)->b)->a: a = {a}, b = {b}, "
                    f"b->a = {_cell(val2)}, ((a->b)->b)->a = {val}\n"
                )
    return "".join(parts)


def _parse_row(line: str, size: int) -> list[Optional[int]]:
    row: list[Optional[int]] = []
    pos = 0
    for _ in range(size):
        match = _CELL.match(line, pos)
        pos = match.end()
        digits = match.group(2)
        row.append(int(digits) if digits is not None else None)
    return row


def parse_oplus_tables(lines: Iterable[str], size: int = 11) -> Iterator[Table]:
    """Read partial-sum tables of the given size from text lines.

    Cells are numbers, or "." for undefined. Lines starting with "Order" are
    skipped; a line starting with "Left" or "Right" is skipped together with
    the line after it; blank lines are ignored. A table is complete after
    ``size`` rows and the next line, which separates tables, is consumed.
    """
    it = iter(lines)
    rows: Table = []
    for raw in it:
        line = raw.rstrip("\r\n")
        if line.startswith("Order"):
            continue
        if line.startswith("Left") or line.startswith("Right"):
            next(it, None)
            continue
        if not line:
            continue
        if len(rows) == size:
            yield rows
            rows = []
        else:
            rows.append(_parse_row(line, size))
    if len(rows) == size:
        yield rows


def _parse_orders(text: str) -> list[int]:
    try:
        orders = [int(part) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid atom orders: {text!r}") from None
    if not orders or any(order < 0 for order in orders):
        raise argparse.ArgumentTypeError(f"invalid atom orders: {text!r}")
    return orders


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="effalg", description="Analyse finite effect algebras given by partial-sum tables."
    )
    parser.add_argument(
        "--example",
        action="append",
        choices=sorted(EXAMPLES),
        help="built-in example to analyse (repeatable; default: all)",
    )
    parser.add_argument("--file", help="check the identity on every table read from this file")
    parser.add_argument("--size", type=int, default=11, help="size of the tables in --file")
    parser.add_argument(
        "--atomic",
        type=_parse_orders,
        metavar="ORDERS",
        help="print the partial-sum table of the atomic MV-effect algebra with these atom orders",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line; returns the exit status."""
    args = _build_parser().parse_args(argv)
    out = sys.stdout

    if args.atomic is not None:
        algebra = AtomicMVEffectAlgebra(range(1, len(args.atomic) + 1), args.atomic)
        out.write(algebra.format_oplus_table())
        return 0

    if args.file is not None:
        try:
            with open(args.file, encoding="utf-8") as handle:
                for number, table in enumerate(parse_oplus_tables(handle, args.size), start=1):
                    out.write(check_identity(f"Example {number}\n", table))
        except OSError as error:
            print(f"Error opening file {args.file}: {error}", file=sys.stderr)
            return 1
        return 0

    for name in args.example or EXAMPLES:
        title, table = EXAMPLES[name]
        out.write(analyse(title, table))
        associative = is_associative(_normalise(table), None)
        out.write(f"Associativity: {'OK' if associative else 'Not ok.'}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())