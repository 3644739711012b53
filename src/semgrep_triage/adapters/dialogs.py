"""File-picker collaborators used by sessions to choose progress files."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path


class Dialogs(ABC):
    """Ask the user for a path. ``None`` means the dialog was abandoned."""

    @abstractmethod
    def ask_save_path(self, default: Path) -> Path | None:
        """Return the destination for a progress file."""

    @abstractmethod
    def ask_open_path(self) -> Path | None:
        """Return the progress file to load."""


class PresetDialogs(Dialogs):
    """Dialogs answered up front, e.g. from command-line options."""

    def __init__(
        self,
        *,
        save_path: str | os.PathLike[str] | None = None,
        open_path: str | os.PathLike[str] | None = None,
    ) -> None:
        self.save_path = Path(save_path) if save_path else None
        self.open_path = Path(open_path) if open_path else None

    def ask_save_path(self, default: Path) -> Path | None:
        return self.save_path or default

    def ask_open_path(self) -> Path | None:
        return self.open_path


__all__ = ["Dialogs", "PresetDialogs"]
