from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Any

import pytest

from semgrep_triage.errors import IngestError, ProgressFormatError
from semgrep_triage.models import Bucket
from semgrep_triage.store import TriageStore

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def _results() -> list[dict[str, Any]]:
    return json.loads((FIXTURES / "semgrep-results.json").read_text(encoding="utf-8"))["results"]


def _ids(records: list[dict[str, Any]]) -> list[str]:
    return [record["id"] for record in records]


def test_ingest_places_everything_in_untriaged() -> None:
    results = _results()
    store = TriageStore()

    state = store.ingest(results)

    assert _ids(state.untriaged) == ["item-0", "item-1", "item-2"]
    assert state.issues == []
    assert state.false_positives == []
    for original, record in zip(results, state.untriaged, strict=True):
        assert record == {**original, "id": record["id"]}


def test_ingest_does_not_alias_input() -> None:
    results = _results()
    store = TriageStore()
    store.ingest(results)

    results[0]["extra"]["message"] = "changed"

    assert store.state.untriaged[0]["extra"]["message"] != "changed"
    assert "id" not in results[0]


def test_ingest_passes_malformed_entries_through() -> None:
    store = TriageStore()

    state = store.ingest([{"unexpected": True}, "not-an-object"])

    assert state.untriaged == [{"unexpected": True, "id": "item-0"}, {"id": "item-1"}]


def test_ingest_rejects_non_array_and_keeps_state() -> None:
    store = TriageStore()
    store.ingest(_results())
    before = store.serialize()

    with pytest.raises(IngestError):
        store.ingest({"results": []})  # type: ignore[arg-type]

    assert store.serialize() == before


def test_move_to_issues() -> None:
    store = TriageStore()
    store.ingest(_results()[:2])

    state = store.move("item-0", "untriaged", "issues")

    assert _ids(state.untriaged) == ["item-1"]
    assert _ids(state.issues) == ["item-0"]
    assert state.false_positives == []


def test_move_appends_to_end_of_target() -> None:
    store = TriageStore()
    store.ingest(_results())

    store.move("item-2", Bucket.UNTRIAGED, Bucket.FALSE_POSITIVES)
    state = store.move("item-0", Bucket.UNTRIAGED, Bucket.FALSE_POSITIVES)

    assert _ids(state.false_positives) == ["item-2", "item-0"]


def test_move_of_unknown_id_is_a_noop() -> None:
    store = TriageStore()
    store.ingest(_results()[:1])
    before = store.serialize()

    store.move("item-99", "untriaged", "issues")

    assert store.serialize() == before


def test_move_from_wrong_bucket_is_a_noop() -> None:
    store = TriageStore()
    store.ingest(_results()[:1])
    before = store.serialize()

    store.move("item-0", "issues", "falsePositives")

    assert store.serialize() == before


def test_move_rejects_unknown_bucket_before_mutating() -> None:
    store = TriageStore()
    store.ingest(_results())
    before = store.serialize()

    with pytest.raises(ValueError):
        store.move("item-0", "untriaged", "maybe")

    assert store.serialize() == before


def test_random_moves_preserve_partition() -> None:
    store = TriageStore()
    store.ingest(_results() * 4)
    all_ids = sorted(store.state.ids())
    rng = random.Random(1234)
    buckets = list(Bucket)

    for _ in range(200):
        item_id = f"item-{rng.randrange(14)}"
        store.move(item_id, rng.choice(buckets), rng.choice(buckets))

        ids = store.state.ids()
        assert sorted(ids) == all_ids
        assert len(ids) == len(set(ids))


def test_serialize_round_trip() -> None:
    store = TriageStore()
    store.ingest(_results())
    store.move("item-1", "untriaged", "issues")
    store.move("item-0", "untriaged", "falsePositives")
    store.move("item-1", "issues", "untriaged")

    document = json.loads(json.dumps(store.serialize()))
    restored = TriageStore()
    restored.deserialize(document)

    assert restored.state == store.state
    assert set(document) == {"untriaged", "issues", "falsePositives"}


def test_serialize_returns_a_copy() -> None:
    store = TriageStore()
    store.ingest(_results())

    document = store.serialize()
    document["untriaged"].clear()

    assert len(store.state.untriaged) == 3


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"untriaged": [], "issues": []},
        {"untriaged": {}, "issues": [], "falsePositives": []},
        {"untriaged": [{"check_id": "x"}], "issues": [], "falsePositives": []},
        {"untriaged": [{"id": "item-0"}], "issues": [{"id": "item-0"}], "falsePositives": []},
    ],
)
def test_strict_deserialize_rejects_bad_shapes(document: Any) -> None:
    store = TriageStore()
    store.ingest(_results())
    before = store.serialize()

    with pytest.raises(ProgressFormatError):
        store.deserialize(document)

    assert store.serialize() == before


def test_lenient_deserialize_fills_missing_buckets() -> None:
    store = TriageStore(strict=False)

    state = store.deserialize({"issues": [{"id": "item-4"}], "falsePositives": "oops"})

    assert state.untriaged == []
    assert state.issues == [{"id": "item-4"}]
    assert state.false_positives == []
