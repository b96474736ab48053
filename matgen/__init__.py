"""Sparse COO and CSR matrices, a CSR builder, and sparse matrix rescaling."""

__version__ = "0.1.0"

__all__ = [
    "bilinear",
    "conversion",
    "coo",
    "csr",
    "csr_builder",
    "nearest_neighbor",
]