import pytest

from effalg.lattice_ea import BlockElem, LatticeEA
from effalg.mv_block import MVBlock


@pytest.fixture
def lea1():
    return LatticeEA([MVBlock([1, 2, 3], [2, 2, 3]), MVBlock([3, 4, 5], [3, 4, 5])])


@pytest.fixture
def lea2():
    return LatticeEA(
        [
            MVBlock([1, 5, 2], [1, 1, 1]),
            MVBlock([2, 6, 3], [1, 1, 1]),
            MVBlock([3, 7, 4], [1, 1, 1]),
            MVBlock([4, 8, 1], [1, 1, 1]),
        ]
    )


def _canonical(lea):
    return [
        BlockElem(b, e)
        for b, block in enumerate(lea.blocks)
        for e in range(block.max_id())
        if lea.is_canonical(BlockElem(b, e))
    ]


@pytest.mark.parametrize(
    "bel, text",
    [
        (BlockElem(100, 12939), "{   100, 12939 }"),
        (BlockElem(0, 0), "{ 0, 0 }"),
        (BlockElem(2, 6), "{ 2, 6 }"),
        (BlockElem(3, 12), "{  3, 12 }"),
    ],
)
def test_str(bel, text):
    assert str(bel) == text


def test_ordering():
    elems = [BlockElem(1, 0), BlockElem(0, 5), BlockElem(0, 2)]
    assert sorted(elems) == [BlockElem(0, 2), BlockElem(0, 5), BlockElem(1, 0)]


def test_empty_blocks_rejected():
    with pytest.raises(ValueError):
        LatticeEA([])


@pytest.mark.parametrize("atoms, count", [([1, 2], 1), ([1, 3], 1), ([2, 4], 0), ([4, 3], 1)])
def test_common_blocks_sizes(lea1, atoms, count):
    assert len(lea1.common_blocks(atoms)) == count


def test_common_blocks_values(lea1):
    assert lea1.common_blocks([3]) == [0, 1]
    assert lea1.common_blocks([4, 3]) == [1]
    assert lea1.common_blocks([]) == []


def test_block_ids(lea1):
    assert lea1.block_ids(3) == [0, 1]
    assert lea1.block_ids(5) == [1]
    assert lea1.block_ids(9) == []


def test_common_atom(lea1, lea2):
    assert lea1.common_atom(0, 1) == 3
    assert lea2.common_atom(0, 1) == 2
    assert lea2.common_atom(0, 3) == 1
    assert lea2.common_atom(0, 2) is None


@pytest.mark.parametrize(
    "elem, expected",
    [
        ([(1, 2), (2, 1)], True),
        ([(1, 3)], False),
        ([], False),
        ([(2, 4)], False),
        ([(3, 3)], True),
        ([(3, 4)], False),
        ([(1, 1), (4, 1)], False),
    ],
)
def test_is_elem(lea1, elem, expected):
    assert lea1.is_elem(elem) is expected


def test_mv_block(lea2):
    assert lea2.mv_block(BlockElem(1, 3)) == lea2.blocks[1]


def test_are_same_from_source(lea2):
    assert lea2.are_same(BlockElem(2, 6), BlockElem(1, 5)) is True
    assert lea2.are_same(BlockElem(1, 5), BlockElem(2, 6)) is True


def test_are_same_shared_atom(lea2):
    assert lea2.are_same(BlockElem(0, 2), BlockElem(1, 1)) is True
    assert lea2.are_same(BlockElem(0, 1), BlockElem(1, 1)) is False
    assert lea2.are_same(BlockElem(0, 0), BlockElem(2, 0)) is True
    assert lea2.are_same(BlockElem(0, 7), BlockElem(2, 7)) is True


def test_canonical_count(lea2):
    assert len(_canonical(lea2)) == 18


def test_canonical_names(lea2):
    assert lea2.canonical(BlockElem(1, 1)) == BlockElem(0, 2)
    assert lea2.canonical(BlockElem(3, 1)) == BlockElem(0, 1)
    assert lea2.canonical(BlockElem(2, 0)) == BlockElem(0, 0)
    assert lea2.canonical(BlockElem(0, 7)) == BlockElem(3, 7)
    assert lea2.canonical(BlockElem(1, 5)) == BlockElem(1, 5)


def test_orthosupplement(lea2):
    assert lea2.orthosupplement(BlockElem(0, 1)) == BlockElem(0, 6)
    assert lea2.orthosupplement(BlockElem(0, 0)) == BlockElem(3, 7)
    assert lea2.orthosupplement(BlockElem(3, 7)) == BlockElem(0, 0)


def test_orthosupplement_involution(lea2):
    for p in _canonical(lea2):
        assert lea2.orthosupplement(lea2.orthosupplement(p)) == p


def test_bounds_of_everything(lea2):
    zero, one = BlockElem(0, 0), BlockElem(3, 7)
    for p in _canonical(lea2):
        assert lea2.are_leq(zero, p)
        assert lea2.are_leq(p, one)


def test_are_leq_in_block(lea2):
    assert lea2.are_leq(BlockElem(0, 1), BlockElem(0, 3)) is True
    assert lea2.are_leq(BlockElem(0, 3), BlockElem(0, 1)) is False
    assert lea2.are_leq_proto(BlockElem(0, 1), BlockElem(0, 3)) is True


def test_are_leq_across_blocks(lea2):
    assert lea2.are_leq(BlockElem(0, 1), BlockElem(1, 5)) is False
    assert lea2.are_leq(BlockElem(0, 1), BlockElem(2, 5)) is True


def test_oplus(lea2):
    assert lea2.oplus(BlockElem(0, 1), BlockElem(0, 2)) == BlockElem(0, 3)
    assert lea2.oplus(BlockElem(0, 1), BlockElem(0, 1)) is None
    assert lea2.oplus(BlockElem(0, 0), BlockElem(1, 1)) == BlockElem(0, 2)
    assert lea2.oplus(BlockElem(1, 1), BlockElem(0, 1)) == BlockElem(0, 3)
    assert lea2.oplus(BlockElem(0, 1), BlockElem(1, 2)) is None


def test_oplus_with_orthosupplement_is_top(lea2):
    for p in _canonical(lea2):
        assert lea2.oplus(p, lea2.orthosupplement(p)) == BlockElem(3, 7)


def test_block_representation(lea2):
    assert lea2.block_representation(BlockElem(0, 2), 1) == BlockElem(1, 1)
    assert lea2.block_representation(BlockElem(0, 5), 1) == BlockElem(1, 6)
    assert lea2.block_representation(BlockElem(0, 1), 1) is None
    assert lea2.block_representation(BlockElem(0, 0), 2) == BlockElem(2, 0)
    assert lea2.block_representation(BlockElem(0, 7), 2) == BlockElem(2, 7)
    assert lea2.block_representation(BlockElem(0, 1), 2) is None


def test_inf_sup(lea2):
    assert lea2.inf(BlockElem(0, 1), BlockElem(0, 2)) == BlockElem(0, 0)
    assert lea2.sup(BlockElem(0, 1), BlockElem(0, 2)) == BlockElem(0, 3)
    assert lea2.inf(BlockElem(0, 1), BlockElem(0, 1)) == BlockElem(0, 1)
    assert lea2.inf(BlockElem(0, 3), BlockElem(0, 5)) == BlockElem(0, 1)


def test_impl(lea2):
    assert lea2.impl(BlockElem(0, 1), BlockElem(0, 1)) == BlockElem(3, 7)
    assert lea2.impl(BlockElem(0, 0), BlockElem(0, 1)) == BlockElem(3, 7)


def test_id_total(lea2):
    assert lea2.id_total(BlockElem(0, 3)) == 3
    assert lea2.id_total(BlockElem(2, 1)) == 17