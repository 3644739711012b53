"""Shared test fixtures for the triage tests."""

from __future__ import annotations

import logging
from typing import Generator

import pytest


@pytest.fixture(autouse=True)
def reset_package_logging() -> Generator[None, None, None]:
    """Drop handlers installed by ``setup_logging`` so they do not outlive a test's streams."""
    yield
    logger = logging.getLogger("semgrep_triage")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
