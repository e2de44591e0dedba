import pytest

from effalg.lattice_ea import BlockElem, LatticeEA
from effalg.lattice_ea_ops import LatticeEAOps
from effalg.mv_block import MVBlock


def _cycle_lea():
    return LatticeEA(
        [
            MVBlock([1, 5, 2], [1, 1, 1]),
            MVBlock([2, 6, 3], [1, 1, 1]),
            MVBlock([3, 7, 4], [1, 1, 1]),
            MVBlock([4, 8, 1], [1, 1, 1]),
        ]
    )


@pytest.fixture(scope="module")
def ops():
    result = LatticeEAOps(_cycle_lea())
    result.generate_ops()
    return result


def test_size():
    assert len(LatticeEAOps(_cycle_lea())) == 18


def test_operations_require_generation():
    fresh = LatticeEAOps(_cycle_lea())
    with pytest.raises(RuntimeError):
        fresh.order(0, 1)
    with pytest.raises(RuntimeError):
        fresh.impl(0, 1)


def test_index_mapping():
    fresh = LatticeEAOps(_cycle_lea())
    assert fresh.idx_to_elem(0) == BlockElem(0, 0)
    assert fresh.idx_to_elem(7) == BlockElem(1, 2)
    assert fresh.idx_to_elem(11) == BlockElem(2, 2)
    assert fresh.idx_to_elem(15) == BlockElem(3, 3)
    assert fresh.idx_to_elem(17) == BlockElem(3, 7)
    assert fresh.idx_to_elem(None) is None
    assert fresh.elem_to_idx(None) is None
    for idx in range(len(fresh)):
        assert fresh.elem_to_idx(fresh.idx_to_elem(idx)) == idx


def test_index_errors():
    fresh = LatticeEAOps(_cycle_lea())
    with pytest.raises(KeyError):
        fresh.elem_to_idx(BlockElem(0, 7))
    with pytest.raises(IndexError):
        fresh.idx_to_elem(18)


def test_progress_called_per_row():
    rows = []
    fresh = LatticeEAOps(_cycle_lea())
    fresh.generate_ops(rows.append)
    assert rows == list(range(18))


def test_order_is_partial_order_with_bounds(ops):
    n = len(ops)
    for a in range(n):
        assert ops.order(a, a)
        assert ops.order(0, a)
        assert ops.order(a, n - 1)
        for b in range(n):
            if a != b:
                assert not (ops.order(a, b) and ops.order(b, a))


def test_atom_sums(ops):
    assert ops.oplus(1, 2) == 3
    assert ops.oplus(1, 1) is None
    assert ops.inf(1, 2) == 0
    assert ops.sup(1, 2) == 3
    assert ops.orthosupplement(1) == 6


def test_orthosupplement_laws(ops):
    top = len(ops) - 1
    for a in range(len(ops)):
        assert ops.orthosupplement(ops.orthosupplement(a)) == a
        assert ops.oplus(a, ops.orthosupplement(a)) == top
        assert ops.oplus(0, a) == a


def test_none_propagates(ops):
    assert ops.oplus(None, 1) is None
    assert ops.inf(1, None) is None
    assert ops.impl(None, None) is None


def test_shared_lea_identifies_coatoms(ops):
    assert ops.lea.are_same(BlockElem(2, 6), BlockElem(1, 5))