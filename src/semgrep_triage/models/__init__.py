"""Data models for scanner findings and triage state."""

from .finding import Finding, FindingSeverity, Position
from .state import Bucket, FindingRecord, TriageState

__all__ = [
    "Bucket",
    "Finding",
    "FindingRecord",
    "FindingSeverity",
    "Position",
    "TriageState",
]
