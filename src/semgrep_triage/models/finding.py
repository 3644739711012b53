"""Finding models derived from raw scanner result records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FindingSeverity(str, Enum):
    """Severity levels reported by the scanner."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True, slots=True)
class Position:
    """A 1-indexed line/column location inside a source file."""

    line: int = 1
    col: int = 1


@dataclass(frozen=True, slots=True)
class Finding:
    """Read-only typed view over a stored scanner result record.

    The record itself stays a plain mapping so that every field the scanner
    emitted survives save/load unchanged; this view only exposes the fields
    the display and the editor navigation need.
    """

    id: str
    check_id: str
    path: str
    start: Position
    end: Position
    message: str
    severity: FindingSeverity
    lines: str
