import subprocess

import pytest

from semgrep_triage.adapters import CommandEditorNavigator
from semgrep_triage.adapters.editor import DEFAULT_EDITOR_COMMAND, unknown_placeholders
from semgrep_triage.errors import NavigationError


def test_go_to_resolves_relative_paths(monkeypatch, tmp_path):
    source = tmp_path / "app" / "db.py"
    source.parent.mkdir()
    source.write_text("import os\n", encoding="utf-8")

    commands = []

    def fake_run(self, args):
        commands.append(list(args))

    monkeypatch.setattr(CommandEditorNavigator, "_run_command", fake_run, raising=False)

    navigator = CommandEditorNavigator(tmp_path)
    resolved = navigator.go_to("app/db.py", 12, 5)

    assert resolved == source
    assert commands == [["code", "--goto", f"{source}:12:5"]]


def test_go_to_clamps_positions(monkeypatch, tmp_path):
    source = tmp_path / "main.py"
    source.write_text("", encoding="utf-8")
    commands = []

    monkeypatch.setattr(
        CommandEditorNavigator, "_run_command", lambda self, args: commands.append(args), raising=False
    )

    navigator = CommandEditorNavigator(tmp_path, command=["vim", "+{line}", "{path}"])
    navigator.go_to(str(source), 0, -4)

    assert commands == [["vim", "+1", str(source)]]


def test_go_to_missing_file_raises(tmp_path):
    navigator = CommandEditorNavigator(tmp_path)

    with pytest.raises(NavigationError, match="Could not open file: missing.py"):
        navigator.go_to("missing.py", 1, 1)


def test_missing_editor_executable_raises(monkeypatch, tmp_path):
    source = tmp_path / "main.py"
    source.write_text("", encoding="utf-8")

    def fake_run(*args, **kwargs):
        raise FileNotFoundError("no such file")

    monkeypatch.setattr(subprocess, "run", fake_run)

    navigator = CommandEditorNavigator(tmp_path, command=["no-such-editor", "{path}"])
    with pytest.raises(NavigationError, match="Editor executable not found: no-such-editor"):
        navigator.go_to("main.py", 1, 1)


def test_failing_editor_raises(monkeypatch, tmp_path):
    source = tmp_path / "main.py"
    source.write_text("", encoding="utf-8")

    def fake_run(args, **kwargs):
        raise subprocess.CalledProcessError(3, args)

    monkeypatch.setattr(subprocess, "run", fake_run)

    navigator = CommandEditorNavigator(tmp_path)
    with pytest.raises(NavigationError, match="exit code 3"):
        navigator.go_to("main.py", 1, 1)


def test_unknown_placeholder_raises_navigation_error(monkeypatch, tmp_path):
    source = tmp_path / "main.py"
    source.write_text("", encoding="utf-8")
    commands = []

    monkeypatch.setattr(
        CommandEditorNavigator, "_run_command", lambda self, args: commands.append(args), raising=False
    )

    navigator = CommandEditorNavigator(tmp_path, command=["vim", "+{line}", "{file}"])
    with pytest.raises(NavigationError, match="Invalid editor command template"):
        navigator.go_to("main.py", 1, 1)

    assert commands == []


def test_unknown_placeholders_lists_foreign_fields():
    assert unknown_placeholders(DEFAULT_EDITOR_COMMAND) == []
    assert unknown_placeholders(["vim", "+{line}", "{file}", "{path.name}", "{0}"]) == ["file", "0"]

    with pytest.raises(ValueError):
        unknown_placeholders(["vim", "{path"])
