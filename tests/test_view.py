from __future__ import annotations

import json
from pathlib import Path

from semgrep_triage.models import Bucket, FindingSeverity
from semgrep_triage.store import TriageStore
from semgrep_triage.view import COLUMNS, build_view, render_table

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def _store() -> TriageStore:
    results = json.loads((FIXTURES / "semgrep-results.json").read_text(encoding="utf-8"))["results"]
    store = TriageStore()
    store.ingest(results)
    store.move("item-0", "untriaged", "issues")
    return store


def test_build_view_groups_rows_by_bucket() -> None:
    view = build_view(_store().state)

    assert [bucket_view.bucket for bucket_view in view.buckets] == list(Bucket)
    assert view.bucket(Bucket.UNTRIAGED).count == 2
    issue = view.bucket(Bucket.ISSUES).rows[0]
    assert issue.id == "item-0"
    assert issue.finding.severity is FindingSeverity.ERROR
    assert issue.finding.start.line == 12
    assert view.bucket(Bucket.FALSE_POSITIVES).rows == ()


def test_rows_offer_moves_to_the_other_buckets() -> None:
    view = build_view(_store().state)

    assert view.bucket(Bucket.UNTRIAGED).rows[0].actions == (Bucket.ISSUES, Bucket.FALSE_POSITIVES)
    assert view.bucket(Bucket.ISSUES).rows[0].actions == (Bucket.FALSE_POSITIVES, Bucket.UNTRIAGED)


def test_build_view_from_raw_document_with_missing_buckets() -> None:
    view = build_view({"issues": [{"id": "item-7", "check_id": "rule.x"}], "untriaged": "bad"})

    assert view.bucket(Bucket.UNTRIAGED).count == 0
    assert view.bucket(Bucket.ISSUES).rows[0].finding.check_id == "rule.x"
    assert view.bucket(Bucket.FALSE_POSITIVES).count == 0


def test_render_table_lists_headings_and_columns() -> None:
    output = render_table(build_view(_store().state))

    assert "Untriaged Items (2)" in output
    assert "Issues (1)" in output
    assert "False Positives (0)\n  No findings." in output
    assert all(column in output for column in COLUMNS)
    assert "Go To, False Positive, Untriaged" in output


def test_render_table_can_select_buckets() -> None:
    output = render_table(build_view(_store().state), buckets=[Bucket.ISSUES])

    assert output.startswith("Issues (1)")
    assert "Untriaged Items" not in output
