"""Normalization of raw scanner records."""

from .finding_normalizer import FindingNormalizer

__all__ = ["FindingNormalizer"]
