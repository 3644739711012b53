"""Loading of the optional ``.semgrep-triage.yaml`` settings file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping

import yaml

from .adapters.editor import DEFAULT_EDITOR_COMMAND, unknown_placeholders
from .errors import ConfigError

DEFAULT_CONFIG_FILENAME = ".semgrep-triage.yaml"
DEFAULT_PROGRESS_FILENAME = "semgrep_triage_progress.json"


@dataclass(slots=True)
class TriageConfig:
    """Settings shared by the CLI and the triage sessions it opens."""

    workspace_root: Path | None = None
    progress_filename: str = DEFAULT_PROGRESS_FILENAME
    editor_command: List[str] = field(default_factory=lambda: list(DEFAULT_EDITOR_COMMAND))
    strict_progress: bool = True
    log_level: str = "WARNING"


def load_config(path: Path | str | None = None, *, cwd: Path | None = None) -> TriageConfig:
    """Load settings from ``path``, or from the default file in ``cwd`` if present."""

    if path is None:
        candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILENAME
        if not candidate.exists():
            return TriageConfig()
        path = candidate

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
        raise ConfigError(f"Failed to read configuration file {config_path}") from exc

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file {config_path}") from exc

    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration file must be a mapping: {config_path}")

    return _build_config(data, base_dir=config_path.resolve().parent)


def _build_config(data: Mapping[str, Any], *, base_dir: Path) -> TriageConfig:
    config = TriageConfig()

    root = data.get("workspace_root")
    if root is not None:
        if not isinstance(root, str) or not root.strip():
            raise ConfigError("workspace_root must be a non-empty string")
        root_path = Path(root).expanduser()
        config.workspace_root = root_path if root_path.is_absolute() else base_dir / root_path

    filename = data.get("progress_filename")
    if filename is not None:
        if not isinstance(filename, str) or not filename.strip():
            raise ConfigError("progress_filename must be a non-empty string")
        config.progress_filename = filename.strip()

    command = data.get("editor_command")
    if command is not None:
        if not isinstance(command, list) or not command or not all(isinstance(part, str) for part in command):
            raise ConfigError("editor_command must be a non-empty list of strings")
        try:
            unknown = unknown_placeholders(command)
        except ValueError as exc:
            raise ConfigError(f"editor_command is not a valid template: {exc}") from exc
        if unknown:
            raise ConfigError(
                "editor_command may only use {path}, {line} and {col}; found "
                + ", ".join(f"{{{name}}}" for name in unknown)
            )
        config.editor_command = list(command)

    strict = data.get("strict_progress")
    if strict is not None:
        if not isinstance(strict, bool):
            raise ConfigError("strict_progress must be true or false")
        config.strict_progress = strict

    level = data.get("log_level")
    if level is not None:
        if not isinstance(level, str):
            raise ConfigError("log_level must be a string")
        config.log_level = level.strip().upper()

    return config


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_PROGRESS_FILENAME",
    "TriageConfig",
    "load_config",
]
