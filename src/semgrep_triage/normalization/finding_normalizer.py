"""Conversion helpers that turn raw scanner result records into typed findings."""

from __future__ import annotations

from typing import Any, Mapping

from ..models import Finding, FindingSeverity, Position


class FindingNormalizer:
    """Normalize raw scanner records into :class:`Finding` views.

    Records are never rejected: missing or wrongly typed fields fall back to
    empty defaults so that a malformed entry can still be displayed and moved.
    """

    def normalize(self, record: Any) -> Finding:
        """Return a typed view of ``record``."""

        if not isinstance(record, Mapping):
            record = {}

        extra = record.get("extra")
        if not isinstance(extra, Mapping):
            extra = {}

        return Finding(
            id=self._text(record.get("id")),
            check_id=self._text(record.get("check_id")),
            path=self._text(record.get("path")),
            start=self._position(record.get("start")),
            end=self._position(record.get("end")),
            message=self._text(extra.get("message")),
            severity=self._severity(extra.get("severity")),
            lines=self._text(extra.get("lines")),
        )

    # ------------------------------------------------------------------
    def _position(self, value: Any) -> Position:
        if not isinstance(value, Mapping):
            return Position()
        return Position(line=self._coerce_int(value.get("line")), col=self._coerce_int(value.get("col")))

    def _severity(self, value: Any) -> FindingSeverity:
        if isinstance(value, str):
            try:
                return FindingSeverity(value.strip().upper())
            except ValueError:
                pass
        return FindingSeverity.UNKNOWN

    def _text(self, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    def _coerce_int(self, value: Any) -> int:
        if isinstance(value, bool):
            return 1
        if isinstance(value, int):
            return max(1, value)
        if isinstance(value, str):
            try:
                return max(1, int(value.strip()))
            except ValueError:
                return 1
        return 1
