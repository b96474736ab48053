"""Compressed sparse row (CSR) matrices."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CsrMatrix:
    """Sparse matrix stored as row pointers, column indices and values.

    ``row_ptr`` holds ``rows + 1`` offsets. The entries of row ``r`` sit at
    positions ``row_ptr[r]`` up to ``row_ptr[r + 1]`` in ``col_indices`` and
    ``values``.
    """

    rows: int
    cols: int
    row_ptr: list[int] = field(default_factory=list)
    col_indices: list[int] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(
                f"invalid matrix dimensions: {self.rows} x {self.cols}"
            )
        if len(self.col_indices) != len(self.values):
            raise ValueError("column index and value lists differ in length")
        self.row_ptr = list(self.row_ptr) if self.row_ptr else [0] * (self.rows + 1)
        self.col_indices = list(self.col_indices)
        self.values = [float(v) for v in self.values]

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return len(self.values)

    def __len__(self) -> int:
        return self.nnz

    def validate(self) -> bool:
        """Return True if the row pointers and indices are consistent."""
        if self.rows <= 0 or self.cols <= 0:
            return False
        if len(self.row_ptr) != self.rows + 1:
            return False
        if len(self.col_indices) != len(self.values):
            return False
        if self.row_ptr[0] != 0 or self.row_ptr[-1] != self.nnz:
            return False
        if any(a > b for a, b in zip(self.row_ptr, self.row_ptr[1:])):
            return False
        return all(0 <= c < self.cols for c in self.col_indices)

    def row_entries(self, row: int) -> list[tuple[int, float]]:
        """Return the (column, value) pairs stored in ``row``."""
        if not 0 <= row < self.rows:
            raise IndexError(
                f"row {row} out of bounds for matrix with {self.rows} rows"
            )
        start, end = self.row_ptr[row], self.row_ptr[row + 1]
        return list(zip(self.col_indices[start:end], self.values[start:end]))

    def to_dense(self) -> list[list[float]]:
        """Return the matrix as a list of rows; repeated entries are summed."""
        dense = [[0.0] * self.cols for _ in range(self.rows)]
        for row, line in enumerate(dense):
            for col, value in self.row_entries(row):
                line[col] += value
        return dense