# matgen

matgen holds sparse matrices in coordinate (COO) and compressed-sparse-row
(CSR) form and rescales them to new dimensions. It is pure Python and has no
third-party dependencies.

## Modules

### `matgen.coo`

- `CooMatrix(rows, cols, row_indices=..., col_indices=..., values=..., is_sorted=True)`
  keeps entries as three parallel lists. Its dimensions must be positive, or
  `ValueError` is raised. If `is_sorted` is passed as true but the entries are
  not in (row, column) order, the flag is cleared.
  - `add(row, col, value)` appends an entry. Duplicates are kept.
    Out-of-range indices raise `IndexError`.
  - `sort()` orders the entries by (row, column). It is stable, so duplicates
    keep their insertion order.
  - `sum_duplicates()` and `merge_duplicates(policy)` collapse entries that
    share a position. The matrix must be sorted first, or `ValueError` is
    raised.
  - `validate()` returns whether dimensions, list lengths, indices and the
    sorted flag are consistent.
  - `copy()` returns an independent copy.
  - `nnz` gives the number of stored entries. `len()` and iteration over
    `(row, col, value)` tuples also work.
- `CollisionPolicy` says how duplicates are combined: `SUM`, `AVG`
  (a running mean), `MAX`, `MIN`, or `LAST` (the last entry wins).
- `ExecutionPolicy` has the members `SEQ`, `PAR` and `AUTO`.

### `matgen.csr`

- `CsrMatrix(rows, cols, row_ptr=..., col_indices=..., values=...)` stores
  `rows + 1` row offsets together with column indices and values. If no
  `row_ptr` is given, the matrix is empty.
  - `validate()` checks the row pointers and the column indices.
  - `row_entries(row)` returns the `(column, value)` pairs of one row.
  - `to_dense()` returns a list of rows. Repeated entries are summed.

### `matgen.conversion`

- `coo_to_csr(coo)` builds a `CsrMatrix`. An unsorted input is sorted in a
  copy, so the input itself is left unchanged. Duplicates are carried over
  as separate entries. An invalid input raises `ValueError`.
- `csr_to_coo(csr)` builds a `CooMatrix` in row order that is marked sorted.

### `matgen.csr_builder`

- `CsrBuilder(rows, cols, est_nnz=0, execution=ExecutionPolicy.SEQ)` collects
  entries in any order, and entries at the same cell are summed. `add` may be
  called from several threads. `nnz` counts the entries added, duplicates
  included. `finalize()` returns a `CsrMatrix` whose rows are sorted by
  column. A builder can be finalized only once. A second `finalize`, or an
  `add` after it, raises `RuntimeError`.

### `matgen.nearest_neighbor`

- `scale_nearest_neighbor(source, new_rows, new_cols, collision_policy=CollisionPolicy.SUM, execution=ExecutionPolicy.AUTO)`
  copies each non-zero source entry, at full value, into every destination
  cell whose nearest source cell it is.
  - With `ExecutionPolicy.PAR`, the rows are processed on a thread pool, the
    results are gathered with a `CsrBuilder`, and collisions are always summed.
    Any other policy is replaced by a sum and a warning is logged.
  - `SEQ` and `AUTO` run sequentially and apply `collision_policy`.

### `matgen.bilinear`

- `scale_bilinear(source, new_rows, new_cols, execution=ExecutionPolicy.AUTO)`
  spreads each non-zero source entry over the destination cells for which it
  is one of the four bilinear neighbours. Each contribution is weighted, and
  contributions to the same cell are summed. `ExecutionPolicy.PAR` uses a
  thread pool, and the other policies run sequentially.

Both scaling functions raise `ValueError` when a target dimension is not
positive. They log their progress through the standard `logging` module.

## Example

```python
from matgen.bilinear import scale_bilinear
from matgen.conversion import coo_to_csr
from matgen.coo import CollisionPolicy, CooMatrix, ExecutionPolicy
from matgen.nearest_neighbor import scale_nearest_neighbor

coo = CooMatrix(3, 3)
coo.add(2, 1, 4.0)
coo.add(0, 0, 1.0)
coo.add(0, 0, 2.0)
coo.sort()
coo.sum_duplicates()
source = coo_to_csr(coo)

larger = scale_nearest_neighbor(source, 6, 6, CollisionPolicy.MAX, ExecutionPolicy.SEQ)
smoother = scale_bilinear(source, 6, 6, ExecutionPolicy.PAR)

for column, value in larger.row_entries(0):
    print(column, value)
```

## What it does not do

matgen works only on matrices in memory. It does not read or write matrix
files, has no command-line tool, and does not generate random matrices.

## Running the tests

```
pip install -e ".[test]"
pytest
```