"""Editor navigation adapters."""

from __future__ import annotations

import logging
import os
import string
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from ..errors import NavigationError

logger = logging.getLogger(__name__)

DEFAULT_EDITOR_COMMAND = ("code", "--goto", "{path}:{line}:{col}")
COMMAND_PLACEHOLDERS = frozenset({"path", "line", "col"})


def unknown_placeholders(command: Sequence[str]) -> List[str]:
    """Return the fields of ``command`` other than ``{path}``, ``{line}`` and ``{col}``.

    Raises ``ValueError`` when a part is not a valid format string, e.g. an
    unmatched brace.
    """

    unknown: List[str] = []
    for part in command:
        for _, field_name, _, _ in string.Formatter().parse(part):
            if field_name is None:
                continue
            name = field_name.split(".", 1)[0].split("[", 1)[0]
            if name not in COMMAND_PLACEHOLDERS and field_name not in unknown:
                unknown.append(field_name)
    return unknown


class EditorNavigator(ABC):
    """Open a source location for the user.

    Relative paths are resolved against ``root_path``; line and column are
    1-indexed and clamped to the first line/column.
    """

    def __init__(self, root_path: str | os.PathLike[str] | None = None) -> None:
        self.root_path = Path(root_path) if root_path else Path.cwd()

    def go_to(self, path: str, line: int, col: int) -> Path:
        """Open ``path`` at ``line``/``col`` and return the resolved file path."""

        target = self.resolve(path)
        if not target.is_file():
            raise NavigationError(f"Could not open file: {path}. (Is the path correct?)")

        self.open_location(target, max(1, int(line)), max(1, int(col)))
        return target

    def resolve(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.root_path / candidate

    @abstractmethod
    def open_location(self, path: Path, line: int, col: int) -> None:
        """Show ``path`` with the cursor at ``line``/``col``."""


class CommandEditorNavigator(EditorNavigator):
    """Navigator that launches an editor executable from a command template."""

    def __init__(
        self,
        root_path: str | os.PathLike[str] | None = None,
        *,
        command: Sequence[str] | None = None,
    ) -> None:
        super().__init__(root_path)
        self.command = list(command or DEFAULT_EDITOR_COMMAND)

    def open_location(self, path: Path, line: int, col: int) -> None:
        args = self._build_command(path, line, col)
        logger.debug("Opening %s:%d:%d", path, line, col)
        self._run_command(args)

    def _build_command(self, path: Path, line: int, col: int) -> List[str]:
        try:
            return [part.format(path=path, line=line, col=col) for part in self.command]
        except (AttributeError, IndexError, KeyError, ValueError) as exc:
            raise NavigationError(f"Invalid editor command template {self.command!r}: {exc!r}") from exc

    # Command runner -------------------------------------------------------------
    def _run_command(self, args: List[str]) -> None:
        try:
            subprocess.run(args, check=True, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise NavigationError(f"Editor executable not found: {args[0]}") from exc
        except subprocess.CalledProcessError as exc:
            raise NavigationError(
                f"Command '{' '.join(args)}' failed with exit code {exc.returncode}"
            ) from exc


__all__ = [
    "COMMAND_PLACEHOLDERS",
    "CommandEditorNavigator",
    "DEFAULT_EDITOR_COMMAND",
    "EditorNavigator",
    "NavigationError",
    "unknown_placeholders",
]
