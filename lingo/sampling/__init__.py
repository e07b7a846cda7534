"""Candidate sampling and normalization."""

from .reservoir import sample
from .normalizer import normalize_string, normalize_strings

__all__ = ["sample", "normalize_string", "normalize_strings"]
