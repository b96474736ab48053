import threading

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from matgen.coo import ExecutionPolicy
from matgen.csr_builder import CsrBuilder


def test_single_entry_lands_in_its_row():
    builder = CsrBuilder(3, 4)
    builder.add(1, 2, 5.0)
    csr = builder.finalize()
    assert csr.rows == 3
    assert csr.cols == 4
    assert csr.row_ptr == [0, 0, 1, 1]
    assert csr.col_indices == [2]
    assert csr.values == [5.0]


def test_duplicates_are_summed():
    builder = CsrBuilder(2, 2)
    builder.add(0, 1, 1.5)
    builder.add(0, 1, 2.5)
    builder.add(0, 1, 1.0)
    csr = builder.finalize()
    assert csr.nnz == 1
    assert csr.row_entries(0) == [(1, 5.0)]


def test_columns_sorted_within_rows():
    builder = CsrBuilder(2, 6)
    for col in (5, 0, 3, 1):
        builder.add(1, col, float(col + 1))
    csr = builder.finalize()
    assert csr.col_indices == [0, 1, 3, 5]
    assert csr.values == [1.0, 2.0, 4.0, 6.0]
    assert csr.validate()


def test_nnz_counts_every_add_including_duplicates():
    builder = CsrBuilder(3, 3)
    builder.add(0, 0, 1.0)
    builder.add(0, 0, 1.0)
    builder.add(2, 1, 1.0)
    assert builder.nnz == 3
    csr = builder.finalize()
    assert csr.nnz == 2


def test_empty_builder_gives_empty_matrix():
    csr = CsrBuilder(4, 2).finalize()
    assert csr.nnz == 0
    assert csr.row_ptr == [0, 0, 0, 0, 0]
    assert csr.validate()


@pytest.mark.parametrize("row, col", [(3, 0), (0, 3), (-1, 0), (0, -1)])
def test_out_of_bounds_rejected(row, col):
    builder = CsrBuilder(3, 3)
    with pytest.raises(IndexError):
        builder.add(row, col, 1.0)
    assert builder.nnz == 0


@pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, 2)])
def test_invalid_dimensions_rejected(rows, cols):
    with pytest.raises(ValueError):
        CsrBuilder(rows, cols)


def test_add_after_finalize_rejected():
    builder = CsrBuilder(2, 2)
    builder.finalize()
    assert builder.finalized
    with pytest.raises(RuntimeError):
        builder.add(0, 0, 1.0)


def test_finalize_twice_rejected():
    builder = CsrBuilder(2, 2)
    builder.add(1, 1, 2.0)
    builder.finalize()
    with pytest.raises(RuntimeError):
        builder.finalize()


def test_concurrent_adds_sum_correctly():
    builder = CsrBuilder(4, 4, est_nnz=64, execution=ExecutionPolicy.PAR)

    def worker():
        for _ in range(250):
            for r in range(4):
                builder.add(r, r, 1.0)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert builder.nnz == 4 * 250 * 4
    csr = builder.finalize()
    assert csr.col_indices == [0, 1, 2, 3]
    assert csr.values == [1000.0] * 4


entries = st.lists(
    st.tuples(
        st.integers(0, 5),
        st.integers(0, 6),
        st.floats(-100, 100, allow_nan=False),
    ),
    max_size=60,
)


@settings(max_examples=60)
@given(entries)
def test_matches_dense_accumulation(items):
    builder = CsrBuilder(6, 7)
    dense = [[0.0] * 7 for _ in range(6)]
    touched = set()
    for r, c, v in items:
        builder.add(r, c, v)
        dense[r][c] += v
        touched.add((r, c))
    csr = builder.finalize()

    assert csr.validate()
    assert csr.nnz == len(touched)
    assert builder.nnz == len(items)
    result = csr.to_dense()
    for r in range(6):
        assert result[r] == pytest.approx(dense[r])
        cols = [c for c, _ in csr.row_entries(r)]
        assert cols == sorted(cols)
        assert len(cols) == len(set(cols))
        assert set(cols) == {c for rr, c in touched if rr == r}