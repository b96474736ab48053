"""Conversion between COO and CSR sparse formats."""

from __future__ import annotations

from itertools import accumulate

from matgen.coo import CooMatrix
from matgen.csr import CsrMatrix


def coo_to_csr(coo: CooMatrix) -> CsrMatrix:
    """Build a CSR matrix from ``coo``, sorting a copy first if needed.

    The input is left unchanged. Duplicate entries are carried over as
    separate entries.
    """
    if not coo.validate():
        raise ValueError("invalid COO matrix")

    if coo.nnz == 0:
        return CsrMatrix(coo.rows, coo.cols)

    ordered = coo
    if not coo.is_sorted:
        ordered = coo.copy()
        ordered.sort()

    counts = [0] * coo.rows
    for row in ordered.row_indices:
        counts[row] += 1
    row_ptr = [0, *accumulate(counts)]

    write_pos = row_ptr[:-1]
    col_indices = [0] * ordered.nnz
    values = [0.0] * ordered.nnz
    for row, col, value in ordered:
        dest = write_pos[row]
        write_pos[row] += 1
        col_indices[dest] = col
        values[dest] = value

    return CsrMatrix(coo.rows, coo.cols, row_ptr, col_indices, values)


def csr_to_coo(csr: CsrMatrix) -> CooMatrix:
    """Build a COO matrix holding the entries of ``csr`` in row order."""
    if not csr.validate():
        raise ValueError("invalid CSR matrix")

    row_indices = [
        row
        for row, (start, end) in enumerate(zip(csr.row_ptr, csr.row_ptr[1:]))
        for _ in range(start, end)
    ]
    return CooMatrix(
        csr.rows,
        csr.cols,
        row_indices,
        list(csr.col_indices),
        list(csr.values),
        is_sorted=True,
    )