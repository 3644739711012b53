from __future__ import annotations

import pytest

from semgrep_triage.models import Bucket, TriageState


def test_bucket_parse_accepts_wire_names_and_members() -> None:
    assert Bucket.parse("falsePositives") is Bucket.FALSE_POSITIVES
    assert Bucket.parse(Bucket.ISSUES) is Bucket.ISSUES


def test_bucket_parse_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown triage bucket"):
        Bucket.parse("false_positives")


def test_bucket_headings() -> None:
    assert [bucket.heading for bucket in Bucket] == ["Untriaged Items", "Issues", "False Positives"]


def test_to_dict_uses_wire_names_in_bucket_order() -> None:
    state = TriageState(untriaged=[{"id": "item-1"}], issues=[{"id": "item-0"}])

    document = state.to_dict()

    assert list(document) == ["untriaged", "issues", "falsePositives"]
    assert document["issues"] == [{"id": "item-0"}]
    assert state.ids() == ["item-1", "item-0"]
