"""Triage sessions binding a store to a display surface."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

from .adapters import CommandEditorNavigator, Dialogs, EditorNavigator, PresetDialogs, ProgressFile, ResultsLoader
from .config import TriageConfig
from .errors import SessionClosedError, TriageError
from .protocol import (
    Command,
    GoTo,
    Initialized,
    Load,
    NotificationLevel,
    Save,
    Triage,
    notify,
    parse_message,
    update_view,
)
from .store import TriageStore

logger = logging.getLogger(__name__)

PostMessage = Callable[[Dict[str, Any]], None]
ResultsLoaderFactory = Callable[[Path], ResultsLoader]
NavigatorFactory = Callable[[Path], EditorNavigator]
ProgressFileFactory = Callable[[Path], ProgressFile]


class TriageSession:
    """Process display-surface commands one at a time against a single store.

    Every state change is followed by an ``updateView`` push carrying the full
    state. A failing command posts an error notification and leaves the state
    as it was.
    """

    def __init__(
        self,
        store: TriageStore,
        post: PostMessage,
        *,
        root_path: Path,
        navigator: EditorNavigator,
        dialogs: Dialogs,
        progress_filename: str,
        progress_file_factory: ProgressFileFactory | None = None,
    ) -> None:
        self.store = store
        self.root_path = root_path
        self._post = post
        self._navigator = navigator
        self._dialogs = dialogs
        self._progress_filename = progress_filename
        self._progress_file_factory = progress_file_factory or ProgressFile
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    def handle_message(self, message: Mapping[str, Any]) -> None:
        """Parse and handle a raw message from the display surface."""

        self._ensure_open()
        try:
            command = parse_message(message)
        except TriageError as exc:
            self._report_error(exc)
            return
        self.handle(command)

    def handle(self, command: Command) -> None:
        """Handle ``command`` to completion."""

        self._ensure_open()
        try:
            match command:
                case Initialized():
                    self.push_state()
                case Triage(id=item_id, source=source, target=target):
                    self.store.move(item_id, source, target)
                    self.push_state()
                case GoTo(path=path, line=line, col=col):
                    self._navigator.go_to(path, line, col)
                case Save(data=data, path=path):
                    self._save(data, path)
                case Load(path=path):
                    self._load(path)
                case _:
                    raise TypeError(f"Unsupported command: {command!r}")
        except TriageError as exc:
            self._report_error(exc)

    def push_state(self) -> None:
        self._post(update_view(self.store.serialize()))

    def notify(self, level: NotificationLevel, message: str) -> None:
        self._post(notify(level, message))

    def dispose(self) -> None:
        self._closed = True
        logger.debug("Disposed triage session rooted at %s", self.root_path)

    # ------------------------------------------------------------------
    def _save(self, data: Any, path: Path | None) -> None:
        destination = path or self._dialogs.ask_save_path(self.root_path / self._progress_filename)
        if destination is None:
            logger.debug("Save dialog abandoned")
            return

        document = data if data is not None else self.store.serialize()
        self._progress_file_factory(self._resolve(destination)).write(document)
        self.notify(NotificationLevel.INFO, "Semgrep triage progress saved successfully!")

    def _load(self, path: Path | None) -> None:
        source = path or self._dialogs.ask_open_path()
        if source is None:
            logger.debug("Open dialog abandoned")
            return

        document = self._progress_file_factory(self._resolve(source)).read()
        self.store.deserialize(document)
        self.push_state()
        self.notify(NotificationLevel.INFO, "Semgrep triage progress loaded successfully!")

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root_path / path

    def _report_error(self, exc: TriageError) -> None:
        logger.warning("%s", exc)
        self.notify(NotificationLevel.ERROR, str(exc))

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("Triage session has been closed")


class TriageHost:
    """Own at most one live :class:`TriageSession`.

    Opening results or an empty session replaces the current one; the
    replaced session is disposed and rejects further commands.
    """

    def __init__(
        self,
        post: PostMessage,
        *,
        config: TriageConfig | None = None,
        dialogs: Dialogs | None = None,
        results_loader_factory: ResultsLoaderFactory | None = None,
        navigator_factory: NavigatorFactory | None = None,
        progress_file_factory: ProgressFileFactory | None = None,
    ) -> None:
        self.config = config or TriageConfig()
        self._post = post
        self._dialogs = dialogs or PresetDialogs()
        self._results_loader_factory = results_loader_factory or ResultsLoader
        self._navigator_factory = navigator_factory or self._default_navigator
        self._progress_file_factory = progress_file_factory
        self._session: TriageSession | None = None

    @property
    def session(self) -> TriageSession | None:
        return self._session

    # ------------------------------------------------------------------
    def open_results(self, results_path: str | os.PathLike[str]) -> TriageSession:
        """Start a session triaging the findings of a scanner results file.

        Loading errors propagate and leave the current session in place.
        """

        path = Path(results_path)
        results = self._results_loader_factory(path).load_results()

        store = TriageStore(strict=self.config.strict_progress)
        store.ingest(results)
        logger.info("Opened %s with %d findings", path, len(results))
        return self._replace(store, self._root_for(path.resolve().parent))

    def open_empty(self) -> TriageSession:
        """Start a session with no findings, e.g. to load saved progress."""

        store = TriageStore(strict=self.config.strict_progress)
        store.ingest([])
        return self._replace(store, self._root_for(None))

    def dispose(self) -> None:
        if self._session is not None:
            self._session.dispose()
            self._session = None

    # ------------------------------------------------------------------
    def _replace(self, store: TriageStore, root_path: Path) -> TriageSession:
        session = TriageSession(
            store,
            self._post,
            root_path=root_path,
            navigator=self._navigator_factory(root_path),
            dialogs=self._dialogs,
            progress_filename=self.config.progress_filename,
            progress_file_factory=self._progress_file_factory,
        )
        self.dispose()
        self._session = session
        session.push_state()
        return session

    def _root_for(self, fallback: Path | None) -> Path:
        if self.config.workspace_root is not None:
            return Path(self.config.workspace_root)
        return fallback or Path.cwd()

    def _default_navigator(self, root_path: Path) -> EditorNavigator:
        return CommandEditorNavigator(root_path, command=self.config.editor_command)


__all__ = ["PostMessage", "TriageHost", "TriageSession"]
