"""Coordinate-format (COO) sparse matrices."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class CollisionPolicy(Enum):
    """How entries that land on the same (row, col) are combined."""

    SUM = 0
    AVG = 1
    MAX = 2
    MIN = 3
    LAST = 4


class ExecutionPolicy(Enum):
    """Execution strategy requested by a caller."""

    SEQ = "seq"
    PAR = "par"
    AUTO = "auto"


@dataclass
class CooMatrix:
    """Sparse matrix stored as parallel lists of row, column and value."""

    rows: int
    cols: int
    row_indices: list[int] = field(default_factory=list)
    col_indices: list[int] = field(default_factory=list)
    values: list[float] = field(default_factory=list)
    is_sorted: bool = True

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(
                f"invalid matrix dimensions: {self.rows} x {self.cols}"
            )
        if not (
            len(self.row_indices) == len(self.col_indices) == len(self.values)
        ):
            raise ValueError("index and value lists differ in length")
        self.row_indices = list(self.row_indices)
        self.col_indices = list(self.col_indices)
        self.values = [float(v) for v in self.values]
        if self.is_sorted:
            self.is_sorted = self._keys_ordered()

    @property
    def nnz(self) -> int:
        """Number of stored entries, duplicates included."""
        return len(self.values)

    def __len__(self) -> int:
        return self.nnz

    def __iter__(self) -> Iterator[tuple[int, int, float]]:
        return iter(zip(self.row_indices, self.col_indices, self.values))

    def _keys_ordered(self) -> bool:
        keys = list(zip(self.row_indices, self.col_indices))
        return all(a <= b for a, b in zip(keys, keys[1:]))

    def add(self, row: int, col: int, value: float) -> None:
        """Append an entry; duplicates are kept until merged."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"index ({row}, {col}) out of bounds for "
                f"{self.rows} x {self.cols} matrix"
            )
        if self.is_sorted and self.values:
            last = (self.row_indices[-1], self.col_indices[-1])
            if (row, col) < last:
                self.is_sorted = False
        self.row_indices.append(row)
        self.col_indices.append(col)
        self.values.append(float(value))

    def sort(self) -> None:
        """Order entries by (row, col), keeping duplicates in insertion order."""
        if self.is_sorted or self.nnz <= 1:
            self.is_sorted = True
            return
        order = sorted(
            range(self.nnz),
            key=lambda i: (self.row_indices[i], self.col_indices[i]),
        )
        self.row_indices = [self.row_indices[i] for i in order]
        self.col_indices = [self.col_indices[i] for i in order]
        self.values = [self.values[i] for i in order]
        self.is_sorted = True

    def sum_duplicates(self) -> None:
        """Combine entries with equal (row, col) by summing; needs sorted input."""
        self.merge_duplicates(CollisionPolicy.SUM)

    def merge_duplicates(self, policy: CollisionPolicy) -> None:
        """Combine entries with equal (row, col) using ``policy``; needs sorted input."""
        try:
            policy = CollisionPolicy(policy)
        except ValueError:
            raise ValueError(f"unknown collision policy: {policy!r}") from None
        if self.nnz <= 1:
            return
        if not self.is_sorted:
            raise ValueError("matrix must be sorted before merging duplicates")

        rows: list[int] = []
        cols: list[int] = []
        vals: list[float] = []
        count = 0
        for r, c, v in self:
            if rows and rows[-1] == r and cols[-1] == c:
                count += 1
                current = vals[-1]
                if policy is CollisionPolicy.SUM:
                    vals[-1] = current + v
                elif policy is CollisionPolicy.AVG:
                    vals[-1] = current + (v - current) / count
                elif policy is CollisionPolicy.MAX:
                    if v > current:
                        vals[-1] = v
                elif policy is CollisionPolicy.MIN:
                    if v < current:
                        vals[-1] = v
                else:
                    vals[-1] = v
            else:
                rows.append(r)
                cols.append(c)
                vals.append(v)
                count = 1

        self.row_indices = rows
        self.col_indices = cols
        self.values = vals

    def validate(self) -> bool:
        """Return True if the dimensions, lengths and indices are consistent."""
        if self.rows <= 0 or self.cols <= 0:
            return False
        if not (
            len(self.row_indices) == len(self.col_indices) == len(self.values)
        ):
            return False
        if any(not 0 <= r < self.rows for r in self.row_indices):
            return False
        if any(not 0 <= c < self.cols for c in self.col_indices):
            return False
        if self.is_sorted and not self._keys_ordered():
            return False
        return True

    def copy(self) -> CooMatrix:
        """Return an independent copy."""
        return CooMatrix(
            self.rows,
            self.cols,
            list(self.row_indices),
            list(self.col_indices),
            list(self.values),
            self.is_sorted,
        )