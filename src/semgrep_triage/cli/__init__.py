"""Command-line interface package for the triage tooling."""

from .app import build_parser, main, run, view_to_dict
from .stdio import line_writer, serve

__all__ = [
    "build_parser",
    "line_writer",
    "main",
    "run",
    "serve",
    "view_to_dict",
]
