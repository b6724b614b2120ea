"""Sparse matrix-vector products, streaming k-median clustering, HJM rate-model building blocks and small linear algebra helpers."""

__version__ = "0.1.0"