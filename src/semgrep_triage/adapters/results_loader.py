from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, List

from ..errors import ResultsLoaderError

logger = logging.getLogger(__name__)


class ResultsLoader:
    """Load the ``results`` array from a scanner JSON report."""

    def __init__(self, results_path: str | os.PathLike[str]) -> None:
        self.results_path = Path(results_path).resolve()

    def load_results(self) -> List[Any]:
        """Return the raw result entries of the report."""

        document = self._load_json_artifact(self.results_path)

        results = document.get("results") if isinstance(document, dict) else None
        if not isinstance(results, list):
            raise ResultsLoaderError('Invalid Semgrep results format: "results" array not found.')

        logger.debug("Read %d results from %s", len(results), self.results_path)
        return results

    def _load_json_artifact(self, path: Path) -> Any:
        if not path.exists():
            raise ResultsLoaderError(f"Scanner results file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ResultsLoaderError(f"Failed to read or parse file: {exc}") from exc
        except OSError as exc:
            raise ResultsLoaderError(f"Failed to read or parse file: {exc.strerror or exc}") from exc


__all__ = ["ResultsLoader", "ResultsLoaderError"]
