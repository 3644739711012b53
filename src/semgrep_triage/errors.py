"""Exception hierarchy shared by the store, adapters and sessions."""

from __future__ import annotations


class TriageError(RuntimeError):
    """Base class for failures reported back to the user."""


class IngestError(TriageError):
    """Raised when scanner results cannot be ingested into a store."""


class ResultsLoaderError(TriageError):
    """Raised when a scanner results file cannot be read or is malformed."""


class ProgressFileError(TriageError):
    """Raised when a progress file cannot be read or written."""


class ProgressFormatError(ProgressFileError):
    """Raised when a progress document does not hold the three triage buckets."""


class NavigationError(TriageError):
    """Raised when a finding location cannot be opened in the editor."""


class ProtocolError(TriageError):
    """Raised when a display surface sends a message the session cannot parse."""


class SessionClosedError(TriageError):
    """Raised when a command reaches a session that was replaced or disposed."""


class ConfigError(TriageError):
    """Raised when the configuration file cannot be loaded."""


__all__ = [
    "ConfigError",
    "IngestError",
    "NavigationError",
    "ProgressFileError",
    "ProgressFormatError",
    "ProtocolError",
    "ResultsLoaderError",
    "SessionClosedError",
    "TriageError",
]
