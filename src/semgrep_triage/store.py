"""In-memory triage store enforcing the bucket partition."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Mapping, Sequence

from .errors import IngestError, ProgressFormatError
from .models import Bucket, FindingRecord, TriageState

logger = logging.getLogger(__name__)

ID_PREFIX = "item"


class TriageStore:
    """Own a :class:`TriageState` and mutate it only through :meth:`move`.

    The three buckets always partition the ingested findings: every record id
    appears in exactly one bucket. Operations that fail raise before touching
    the current state.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict
        self._state = TriageState()

    @property
    def state(self) -> TriageState:
        """Return a copy of the current state."""

        return self._state.copy()

    # ------------------------------------------------------------------
    def ingest(self, findings: Sequence[Any]) -> TriageState:
        """Replace the state with ``findings``, all placed in ``untriaged``."""

        if not isinstance(findings, list):
            raise IngestError("Scanner results must be an array of findings")

        records: List[FindingRecord] = []
        for index, entry in enumerate(findings):
            if isinstance(entry, Mapping):
                record = copy.deepcopy(dict(entry))
            else:
                logger.warning("Result #%d is not an object; keeping only its id", index)
                record = {}
            record["id"] = f"{ID_PREFIX}-{index}"
            records.append(record)

        self._state = TriageState(untriaged=records)
        logger.info("Ingested %d findings", len(records))
        return self.state

    # ------------------------------------------------------------------
    def move(self, item_id: str, source: Bucket | str, target: Bucket | str) -> TriageState:
        """Move ``item_id`` from ``source`` to the end of ``target``.

        An id that is not present in ``source`` leaves the state unchanged.
        """

        source_bucket = Bucket.parse(source)
        target_bucket = Bucket.parse(target)

        records = self._state.bucket(source_bucket)
        index = next(
            (idx for idx, record in enumerate(records) if record.get("id") == item_id),
            None,
        )
        if index is None:
            logger.debug("Ignoring move of %s: not in %s", item_id, source_bucket.value)
            return self.state

        record = records.pop(index)
        self._state.bucket(target_bucket).append(record)
        logger.info("Moved %s from %s to %s", item_id, source_bucket.value, target_bucket.value)
        return self.state

    # ------------------------------------------------------------------
    def serialize(self) -> Dict[str, List[FindingRecord]]:
        """Return the state as a progress document."""

        return self._state.to_dict()

    # ------------------------------------------------------------------
    def deserialize(self, document: Any) -> TriageState:
        """Replace the whole state with a previously serialized document."""

        if self.strict:
            state = self._parse_strict(document)
        else:
            state = self._parse_lenient(document)

        self._state = state
        logger.info(
            "Loaded triage state: %d untriaged, %d issues, %d false positives",
            len(state.untriaged),
            len(state.issues),
            len(state.false_positives),
        )
        return self.state

    # ------------------------------------------------------------------
    def _parse_strict(self, document: Any) -> TriageState:
        if not isinstance(document, Mapping):
            raise ProgressFormatError("Invalid progress file structure: expected a JSON object")

        buckets: Dict[Bucket, List[FindingRecord]] = {}
        seen: set[str] = set()
        for bucket in Bucket:
            entries = document.get(bucket.value)
            if not isinstance(entries, list):
                raise ProgressFormatError(
                    f"Invalid progress file structure: '{bucket.value}' must be an array"
                )

            records: List[FindingRecord] = []
            for entry in entries:
                if not isinstance(entry, Mapping) or not isinstance(entry.get("id"), str):
                    raise ProgressFormatError(
                        f"Invalid progress file structure: every entry in '{bucket.value}' "
                        "must be an object with a string 'id'"
                    )
                item_id = entry["id"]
                if item_id in seen:
                    raise ProgressFormatError(
                        f"Invalid progress file structure: duplicate id '{item_id}'"
                    )
                seen.add(item_id)
                records.append(copy.deepcopy(dict(entry)))
            buckets[bucket] = records

        return self._build_state(buckets)

    def _parse_lenient(self, document: Any) -> TriageState:
        if not isinstance(document, Mapping):
            logger.warning("Progress document is not an object; loading an empty state")
            document = {}

        buckets: Dict[Bucket, List[FindingRecord]] = {}
        for bucket in Bucket:
            entries = document.get(bucket.value)
            if not isinstance(entries, list):
                logger.warning("Progress document has no '%s' array; using an empty bucket", bucket.value)
                entries = []
            buckets[bucket] = [copy.deepcopy(dict(entry)) for entry in entries if isinstance(entry, Mapping)]

        return self._build_state(buckets)

    def _build_state(self, buckets: Mapping[Bucket, List[FindingRecord]]) -> TriageState:
        return TriageState(
            untriaged=buckets[Bucket.UNTRIAGED],
            issues=buckets[Bucket.ISSUES],
            false_positives=buckets[Bucket.FALSE_POSITIVES],
        )


__all__ = ["ID_PREFIX", "TriageStore"]
