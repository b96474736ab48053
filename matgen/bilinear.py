"""Bilinear rescaling of sparse matrices."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator

from matgen.conversion import coo_to_csr
from matgen.coo import CooMatrix, ExecutionPolicy
from matgen.csr import CsrMatrix
from matgen.csr_builder import CsrBuilder

logger = logging.getLogger(__name__)

_ROWS_PER_TASK = 16
_MIN_WEIGHT = 1e-12


def _clamp(value, low, high):
    return max(low, min(value, high))


def _neighborhood(index: int, scale: float, limit: int) -> range:
    """Destination cells for which source ``index`` may be a bilinear neighbour."""
    start = math.ceil(max(0.0, (index - 1.0) * scale))
    end = math.ceil((index + 1.0) * scale)
    return range(_clamp(start, 0, limit), _clamp(end, 0, limit))


def _neighbors(dst: int, scale: float, src_limit: int) -> tuple[int, int, float]:
    """Return the lower and upper source neighbours and the fractional offset."""
    src = dst / scale
    low = _clamp(math.floor(src), 0, src_limit - 1)
    high = _clamp(math.ceil(src), 0, src_limit - 1)
    frac = _clamp(src - low, 0.0, 1.0)
    return low, high, frac


def _weight(
    src_row: int,
    src_col: int,
    y0: int,
    y1: int,
    x0: int,
    x1: int,
    dy: float,
    dx: float,
) -> float:
    if src_row == y0 and src_col == x0:
        return (1.0 - dy) * (1.0 - dx)
    if src_row == y0 and src_col == x1:
        return (1.0 - dy) * dx
    if src_row == y1 and src_col == x0:
        return dy * (1.0 - dx)
    if src_row == y1 and src_col == x1:
        return dy * dx
    return 0.0


def _contributions(
    source: CsrMatrix,
    src_rows: Iterable[int],
    row_scale: float,
    col_scale: float,
    new_rows: int,
    new_cols: int,
) -> Iterator[tuple[int, int, float]]:
    """Yield every weighted (row, col, value) written to the scaled matrix."""
    for src_row in src_rows:
        dst_rows = _neighborhood(src_row, row_scale, new_rows)
        for src_col, value in source.row_entries(src_row):
            if value == 0.0:
                continue
            dst_cols = _neighborhood(src_col, col_scale, new_cols)
            for dst_row in dst_rows:
                y0, y1, dy = _neighbors(dst_row, row_scale, source.rows)
                for dst_col in dst_cols:
                    x0, x1, dx = _neighbors(dst_col, col_scale, source.cols)
                    weight = _weight(src_row, src_col, y0, y1, x0, x1, dy, dx)
                    if weight > _MIN_WEIGHT:
                        yield dst_row, dst_col, value * weight


def _estimate_nnz(source: CsrMatrix, row_scale: float, col_scale: float) -> int:
    max_row_contrib = math.ceil(2.0 * row_scale + 2.0)
    max_col_contrib = math.ceil(2.0 * col_scale + 2.0)
    estimated = int(source.nnz * max_row_contrib * max_col_contrib * 1.5)
    return max(estimated, source.nnz * 4)


def _scale_sequential(
    source: CsrMatrix,
    new_rows: int,
    new_cols: int,
    row_scale: float,
    col_scale: float,
) -> CsrMatrix:
    coo = CooMatrix(new_rows, new_cols)
    for row, col, value in _contributions(
        source, range(source.rows), row_scale, col_scale, new_rows, new_cols
    ):
        coo.add(row, col, value)
    logger.debug("Generated %d triplets", coo.nnz)

    coo.sort()
    coo.sum_duplicates()
    logger.debug("After deduplication: %d entries", coo.nnz)
    return coo_to_csr(coo)


def _scale_parallel(
    source: CsrMatrix,
    new_rows: int,
    new_cols: int,
    row_scale: float,
    col_scale: float,
) -> CsrMatrix:
    builder = CsrBuilder(
        new_rows,
        new_cols,
        _estimate_nnz(source, row_scale, col_scale),
        ExecutionPolicy.PAR,
    )

    def fill(src_rows: range) -> None:
        for row, col, value in _contributions(
            source, src_rows, row_scale, col_scale, new_rows, new_cols
        ):
            builder.add(row, col, value)

    chunks = [
        range(start, min(start + _ROWS_PER_TASK, source.rows))
        for start in range(0, source.rows, _ROWS_PER_TASK)
    ]
    with ThreadPoolExecutor() as pool:
        for future in [pool.submit(fill, chunk) for chunk in chunks]:
            future.result()

    return builder.finalize()


def scale_bilinear(
    source: CsrMatrix,
    new_rows: int,
    new_cols: int,
    execution: ExecutionPolicy = ExecutionPolicy.AUTO,
) -> CsrMatrix:
    """Rescale ``source`` to ``new_rows`` x ``new_cols`` by bilinear interpolation.

    Each non-zero source entry spreads its value, weighted bilinearly, over
    the destination cells for which it is one of the four neighbours.
    Contributions landing on the same cell are summed.
    """
    if source is None:
        raise ValueError("source matrix is required")
    if new_rows <= 0 or new_cols <= 0:
        raise ValueError(f"invalid target dimensions: {new_rows} x {new_cols}")

    mode = ExecutionPolicy(execution)
    row_scale = new_rows / source.rows
    col_scale = new_cols / source.cols
    logger.debug(
        "Bilinear scaling (%s): %dx%d -> %dx%d (scale: %.3fx%.3f)",
        mode.name,
        source.rows,
        source.cols,
        new_rows,
        new_cols,
        row_scale,
        col_scale,
    )

    if mode is ExecutionPolicy.PAR:
        result = _scale_parallel(source, new_rows, new_cols, row_scale, col_scale)
    else:
        result = _scale_sequential(source, new_rows, new_cols, row_scale, col_scale)

    logger.debug("Bilinear scaling completed: output NNZ = %d", result.nnz)
    return result