"""Reading and writing triage progress documents."""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..errors import ProgressFileError

logger = logging.getLogger(__name__)

JSON_INDENT = 2


class ProgressFile:
    """JSON file holding the ``untriaged``/``issues``/``falsePositives`` buckets."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def read(self) -> Any:
        """Return the parsed document. Shape validation is left to the store."""

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ProgressFileError(f"Failed to load progress: {exc.strerror or exc}") from exc
        except UnicodeDecodeError as exc:
            raise ProgressFileError(f"Failed to load progress: {exc}") from exc

        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ProgressFileError(f"Failed to load progress: {exc}") from exc

    def write(self, document: Any) -> None:
        """Serialize ``document`` to the file, creating parent directories.

        The content goes to a sibling ``.tmp`` file first and replaces the
        destination only once fully written, so a failed save leaves any
        previous progress file intact.
        """

        try:
            content = json.dumps(document, indent=JSON_INDENT)
        except (TypeError, ValueError) as exc:
            raise ProgressFileError(f"Failed to save progress: {exc}") from exc

        staging = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            staging.write_text(content, encoding="utf-8")
            staging.replace(self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                staging.unlink(missing_ok=True)
            raise ProgressFileError(f"Failed to save progress: {exc.strerror or exc}") from exc

        logger.info("Saved triage progress to %s", self.path)


__all__ = ["JSON_INDENT", "ProgressFile", "ProgressFileError"]
