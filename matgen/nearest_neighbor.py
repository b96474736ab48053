"""Nearest-neighbour rescaling of sparse matrices."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator

from matgen.conversion import coo_to_csr
from matgen.coo import CollisionPolicy, CooMatrix, ExecutionPolicy
from matgen.csr import CsrMatrix
from matgen.csr_builder import CsrBuilder

logger = logging.getLogger(__name__)

_ROWS_PER_TASK = 16


def _destination_range(index: int, scale: float, limit: int) -> range:
    """Destination cells whose nearest source cell is ``index``."""
    start = math.ceil((index - 0.5) * scale)
    end = math.floor((index + 0.5) * scale)
    return range(max(0, min(start, limit)), max(0, min(end, limit)))


def _contributions(
    source: CsrMatrix,
    src_rows: Iterable[int],
    row_scale: float,
    col_scale: float,
    new_rows: int,
    new_cols: int,
) -> Iterator[tuple[int, int, float]]:
    """Yield every (row, col, value) written to the scaled matrix."""
    for src_row in src_rows:
        dst_rows = _destination_range(src_row, row_scale, new_rows)
        for src_col, value in source.row_entries(src_row):
            if value == 0.0:
                continue
            dst_cols = _destination_range(src_col, col_scale, new_cols)
            if not dst_rows or not dst_cols:
                continue
            for dst_row in dst_rows:
                for dst_col in dst_cols:
                    yield dst_row, dst_col, value


def _scale_sequential(
    source: CsrMatrix,
    new_rows: int,
    new_cols: int,
    row_scale: float,
    col_scale: float,
    policy: CollisionPolicy,
) -> CsrMatrix:
    coo = CooMatrix(new_rows, new_cols)
    for row, col, value in _contributions(
        source, range(source.rows), row_scale, col_scale, new_rows, new_cols
    ):
        coo.add(row, col, value)
    logger.debug("Generated %d triplets", coo.nnz)

    coo.sort()
    if policy is CollisionPolicy.SUM:
        coo.sum_duplicates()
    else:
        coo.merge_duplicates(policy)
    logger.debug("After deduplication: %d entries", coo.nnz)
    return coo_to_csr(coo)


def _scale_parallel(
    source: CsrMatrix,
    new_rows: int,
    new_cols: int,
    row_scale: float,
    col_scale: float,
    policy: CollisionPolicy,
) -> CsrMatrix:
    if policy is not CollisionPolicy.SUM:
        logger.warning(
            "CSR builder currently only supports SUM collision policy, "
            "using SUM instead of policy %s",
            policy.name,
        )

    estimated = int(source.nnz * row_scale * col_scale * 1.1)
    logger.debug("Estimated output NNZ: %d", estimated)
    builder = CsrBuilder(new_rows, new_cols, estimated, ExecutionPolicy.PAR)

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


def scale_nearest_neighbor(
    source: CsrMatrix,
    new_rows: int,
    new_cols: int,
    collision_policy: CollisionPolicy = CollisionPolicy.SUM,
    execution: ExecutionPolicy = ExecutionPolicy.AUTO,
) -> CsrMatrix:
    """Rescale ``source`` to ``new_rows`` x ``new_cols`` by nearest neighbour.

    Each non-zero source entry is copied, at full value, into every
    destination cell whose nearest source cell it is. The parallel strategy
    always sums colliding entries; the sequential one applies
    ``collision_policy``.
    """
    if source is None:
        raise ValueError("source matrix is required")
    if new_rows <= 0 or new_cols <= 0:
        raise ValueError(f"invalid target dimensions: {new_rows} x {new_cols}")

    policy = CollisionPolicy(collision_policy)
    mode = ExecutionPolicy(execution)

    row_scale = new_rows / source.rows
    col_scale = new_cols / source.cols
    logger.debug(
        "Nearest neighbor scaling (%s): %dx%d -> %dx%d (scale: %.3fx%.3f)",
        mode.name,
        source.rows,
        source.cols,
        new_rows,
        new_cols,
        row_scale,
        col_scale,
    )

    if mode is ExecutionPolicy.PAR:
        result = _scale_parallel(
            source, new_rows, new_cols, row_scale, col_scale, policy
        )
    else:
        result = _scale_sequential(
            source, new_rows, new_cols, row_scale, col_scale, policy
        )

    logger.debug("Nearest neighbor scaling completed: output NNZ = %d", result.nnz)
    return result