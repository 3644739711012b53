"""Triage Semgrep findings into issues and false positives."""

from .models import Bucket, Finding, FindingSeverity, TriageState
from .session import TriageHost, TriageSession
from .store import TriageStore

__all__ = [
    "Bucket",
    "Finding",
    "FindingSeverity",
    "TriageHost",
    "TriageSession",
    "TriageState",
    "TriageStore",
]
