"""Display-agnostic view model for a triage state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from .models import Bucket, Finding, TriageState
from .normalization import FindingNormalizer

COLUMNS = ("check_id", "message", "severity", "path", "lines", "Actions")

# Order in which move actions are offered on each row.
ACTION_ORDER = (Bucket.ISSUES, Bucket.FALSE_POSITIVES, Bucket.UNTRIAGED)

ACTION_LABELS = {
    Bucket.ISSUES: "Issue",
    Bucket.FALSE_POSITIVES: "False Positive",
    Bucket.UNTRIAGED: "Untriaged",
}


@dataclass(frozen=True, slots=True)
class RowView:
    finding: Finding
    actions: Tuple[Bucket, ...]

    @property
    def id(self) -> str:
        return self.finding.id

    def cells(self) -> Tuple[str, str, str, str, str, str]:
        f = self.finding
        actions = ", ".join(["Go To"] + [ACTION_LABELS[action] for action in self.actions])
        return (f.check_id, f.message, f.severity.value, f.path, f.lines, actions)


@dataclass(frozen=True, slots=True)
class BucketView:
    bucket: Bucket
    rows: Tuple[RowView, ...]

    @property
    def heading(self) -> str:
        return self.bucket.heading

    @property
    def count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True, slots=True)
class TriageView:
    buckets: Tuple[BucketView, ...]

    def bucket(self, bucket: Bucket) -> BucketView:
        for view in self.buckets:
            if view.bucket is bucket:
                return view
        raise KeyError(bucket)


def build_view(
    state: TriageState | Mapping[str, Any],
    *,
    normalizer: FindingNormalizer | None = None,
) -> TriageView:
    """Return the rows to display for each bucket of ``state``.

    ``state`` may also be a raw progress document, in which case absent or
    wrongly shaped buckets render as empty.
    """

    normalizer = normalizer or FindingNormalizer()
    buckets: List[BucketView] = []
    for bucket in Bucket:
        records = _records(state, bucket)
        actions = tuple(action for action in ACTION_ORDER if action is not bucket)
        rows = tuple(RowView(finding=normalizer.normalize(record), actions=actions) for record in records)
        buckets.append(BucketView(bucket=bucket, rows=rows))
    return TriageView(buckets=tuple(buckets))


def _records(state: TriageState | Mapping[str, Any], bucket: Bucket) -> Sequence[Any]:
    if isinstance(state, TriageState):
        return state.bucket(bucket)
    records = state.get(bucket.value)
    return records if isinstance(records, list) else []


def render_table(view: TriageView, *, buckets: Iterable[Bucket] | None = None) -> str:
    """Render the view as plain-text tables for terminal output."""

    selected = set(buckets) if buckets is not None else set(Bucket)
    sections: List[str] = []
    for bucket_view in view.buckets:
        if bucket_view.bucket not in selected:
            continue
        sections.append(_render_bucket(bucket_view))
    return "\n\n".join(sections)


def _render_bucket(bucket_view: BucketView) -> str:
    title = f"{bucket_view.heading} ({bucket_view.count})"
    if not bucket_view.rows:
        return f"{title}\n  No findings."

    rows = [COLUMNS] + [_single_line(row.cells()) for row in bucket_view.rows]
    widths = [max(len(str(row[idx])) for row in rows) for idx in range(len(COLUMNS))]

    def format_row(values: Sequence[str]) -> str:
        return "  ".join(value.ljust(width) for value, width in zip(values, widths, strict=True)).rstrip()

    lines = [title, format_row(COLUMNS)]
    lines.append("  ".join("=" * width for width in widths))
    for row in rows[1:]:
        lines.append(format_row(row))
    return "\n".join(lines)


def _single_line(cells: Sequence[str]) -> Tuple[str, ...]:
    return tuple(" ".join(cell.split()) for cell in cells)


__all__ = [
    "ACTION_LABELS",
    "ACTION_ORDER",
    "BucketView",
    "COLUMNS",
    "RowView",
    "TriageView",
    "build_view",
    "render_table",
]
