"""Incremental construction of CSR matrices from unordered entries."""

from __future__ import annotations

import threading
from itertools import accumulate

from matgen.coo import CollisionPolicy, ExecutionPolicy
from matgen.csr import CsrMatrix


class CsrBuilder:
    """Collect (row, col, value) entries and assemble them into a CSR matrix.

    Entries that land on the same cell are summed. Each row keeps its own
    accumulator, so rows may be filled in any order, and ``add`` is safe to
    call from several threads at once. A builder can be finalized only once.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        est_nnz: int = 0,
        execution: ExecutionPolicy = ExecutionPolicy.SEQ,
    ) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"invalid matrix dimensions: {rows} x {cols}")
        self.rows = rows
        self.cols = cols
        self.est_nnz = max(0, est_nnz)
        self.execution = ExecutionPolicy(execution)
        self.collision_policy = CollisionPolicy.SUM
        self._row_buffers: list[dict[int, float]] = [{} for _ in range(rows)]
        self._entry_count = 0
        self._finalized = False
        self._lock = threading.Lock()

    @property
    def nnz(self) -> int:
        """Number of entries added so far, duplicates included."""
        return self._entry_count

    @property
    def finalized(self) -> bool:
        """Whether ``finalize`` has already been called."""
        return self._finalized

    def add(self, row: int, col: int, value: float) -> None:
        """Add ``value`` to the cell at (``row``, ``col``)."""
        if self._finalized:
            raise RuntimeError("builder has already been finalized")
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"index ({row}, {col}) out of bounds for "
                f"{self.rows} x {self.cols} matrix"
            )
        with self._lock:
            buffer = self._row_buffers[row]
            buffer[col] = buffer.get(col, 0.0) + float(value)
            self._entry_count += 1

    def finalize(self) -> CsrMatrix:
        """Return the assembled matrix, columns sorted within each row."""
        with self._lock:
            if self._finalized:
                raise RuntimeError("builder has already been finalized")
            self._finalized = True
            buffers = self._row_buffers
            self._row_buffers = []

        row_ptr = [0, *accumulate(len(buffer) for buffer in buffers)]
        col_indices: list[int] = []
        values: list[float] = []
        for buffer in buffers:
            for col in sorted(buffer):
                col_indices.append(col)
                values.append(buffer[col])

        return CsrMatrix(self.rows, self.cols, row_ptr, col_indices, values)