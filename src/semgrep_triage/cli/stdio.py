"""Newline-delimited JSON display surface over stdin/stdout."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Callable, Dict, TextIO

from ..protocol import NotificationLevel
from ..session import TriageHost

logger = logging.getLogger(__name__)


def line_writer(stream: TextIO) -> Callable[[Dict[str, Any]], None]:
    """Return a post function writing one JSON message per line to ``stream``."""

    def post(message: Dict[str, Any]) -> None:
        stream.write(json.dumps(message) + "\n")
        stream.flush()

    return post


def serve(host: TriageHost, stdin: TextIO | None = None) -> None:
    """Feed messages read from ``stdin`` to the host's current session until EOF."""

    stdin = stdin or sys.stdin
    for line in stdin:
        line = line.strip()
        if not line:
            continue

        session = host.session
        if session is None:
            logger.warning("Dropping message: no open triage session")
            break

        try:
            message = json.loads(line)
        except json.JSONDecodeError as exc:
            session.notify(NotificationLevel.ERROR, f"Parse error: {exc.msg}")
            continue

        session.handle_message(message)


__all__ = ["line_writer", "serve"]
