"""Messages exchanged between a triage session and its display surface.

Inbound messages are JSON objects of the form ``{"command": <tag>, "data":
{...}}`` and parse into one of the command classes below. ``save`` and
``load`` may carry a top-level ``path``; without one the session asks its
dialogs. Outbound messages are built by :func:`update_view` and
:func:`notify`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .errors import ProtocolError
from .models import Bucket


@dataclass(frozen=True, slots=True)
class Initialized:
    """The display surface is ready for its first state push."""


@dataclass(frozen=True, slots=True)
class Triage:
    id: str
    source: Bucket
    target: Bucket


@dataclass(frozen=True, slots=True)
class GoTo:
    path: str
    line: int
    col: int


@dataclass(frozen=True, slots=True)
class Save:
    data: Any = None
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Load:
    path: Path | None = None


Command = Union[Initialized, Triage, GoTo, Save, Load]


class NotificationLevel(str, Enum):
    INFO = "info"
    ERROR = "error"


def parse_message(message: Any) -> Command:
    """Parse an inbound message into a command."""

    if not isinstance(message, Mapping):
        raise ProtocolError("Message must be a JSON object")

    tag = message.get("command")
    data = message.get("data")

    if tag == "initialized":
        return Initialized()
    if tag == "save":
        return Save(data=data, path=_optional_path(message))
    if tag == "load":
        return Load(path=_optional_path(message))
    if tag not in ("triage", "goTo"):
        raise ProtocolError(f"Unknown command: {tag!r}")

    if not isinstance(data, Mapping):
        raise ProtocolError(f"Message data for '{tag}' must be an object")
    if tag == "triage":
        try:
            return Triage(
                id=_required_str(data, "id"),
                source=Bucket.parse(_required_str(data, "from")),
                target=Bucket.parse(_required_str(data, "to")),
            )
        except ValueError as exc:
            raise ProtocolError(str(exc)) from exc
    return GoTo(
        path=_required_str(data, "path"),
        line=_required_int(data, "line"),
        col=_required_int(data, "col"),
    )


def update_view(state: Mapping[str, Any]) -> Dict[str, Any]:
    return {"command": "updateView", "data": state}


def notify(level: NotificationLevel, message: str) -> Dict[str, Any]:
    return {"command": "notify", "data": {"level": level.value, "message": message}}


# ----------------------------------------------------------------------
def _required_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ProtocolError(f"Missing or invalid '{key}' field")
    return value


def _required_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProtocolError(f"Missing or invalid '{key}' field")
    return value


def _optional_path(data: Mapping[str, Any]) -> Path | None:
    value = data.get("path")
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ProtocolError("Invalid 'path' field")
    return Path(value)


__all__ = [
    "Command",
    "GoTo",
    "Initialized",
    "Load",
    "NotificationLevel",
    "Save",
    "Triage",
    "notify",
    "parse_message",
    "update_view",
]
