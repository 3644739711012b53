"""Adapter layer for the file system, the editor and file pickers."""

from .dialogs import Dialogs, PresetDialogs
from .editor import CommandEditorNavigator, EditorNavigator
from .progress_file import ProgressFile
from .results_loader import ResultsLoader

__all__ = [
    "CommandEditorNavigator",
    "Dialogs",
    "EditorNavigator",
    "PresetDialogs",
    "ProgressFile",
    "ResultsLoader",
]
