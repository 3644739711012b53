"""Triage bucket and state models."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List

FindingRecord = Dict[str, Any]


class Bucket(str, Enum):
    """Triage classification a finding can occupy. Values are the wire names."""

    UNTRIAGED = "untriaged"
    ISSUES = "issues"
    FALSE_POSITIVES = "falsePositives"

    @property
    def heading(self) -> str:
        return _HEADINGS[self]

    @classmethod
    def parse(cls, value: "Bucket | str") -> "Bucket":
        """Return the bucket for a member or its wire name."""

        if isinstance(value, Bucket):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unknown triage bucket: {value!r}") from exc


_HEADINGS = {
    Bucket.UNTRIAGED: "Untriaged Items",
    Bucket.ISSUES: "Issues",
    Bucket.FALSE_POSITIVES: "False Positives",
}


@dataclass(slots=True)
class TriageState:
    """The three buckets together, each an ordered list of finding records."""

    untriaged: List[FindingRecord] = field(default_factory=list)
    issues: List[FindingRecord] = field(default_factory=list)
    false_positives: List[FindingRecord] = field(default_factory=list)

    def bucket(self, bucket: Bucket) -> List[FindingRecord]:
        if bucket is Bucket.UNTRIAGED:
            return self.untriaged
        if bucket is Bucket.ISSUES:
            return self.issues
        return self.false_positives

    def items(self) -> Iterator[tuple[Bucket, List[FindingRecord]]]:
        for bucket in Bucket:
            yield bucket, self.bucket(bucket)

    def ids(self) -> List[str]:
        """Return every record id across all buckets, in bucket order."""

        return [str(record.get("id")) for _, records in self.items() for record in records]

    def to_dict(self) -> Dict[str, List[FindingRecord]]:
        return {bucket.value: copy.deepcopy(records) for bucket, records in self.items()}

    def copy(self) -> "TriageState":
        return TriageState(
            untriaged=copy.deepcopy(self.untriaged),
            issues=copy.deepcopy(self.issues),
            false_positives=copy.deepcopy(self.false_positives),
        )
