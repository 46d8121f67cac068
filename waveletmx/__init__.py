"""Wavelet matrix over k-bit words with access, rank, select, quantile and predecessor/successor queries."""

__version__ = "1.6.2"

__all__ = ["bitops", "bitvec", "iteration", "base", "ranking", "statistics", "wavelet"]