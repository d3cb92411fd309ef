"""Shared fixtures: isolate config state, environment and root logging between tests."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import config

ENV_KEYS = (
    "HT_INTERVAL_SEC",
    "HT_HOSTNAME_SOURCES",
    "HT_SYSTEM_DETECTOR",
    "HT_PROCESSES_SCRAPER",
    "HT_LOG_LEVEL",
    "HT_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    config.reset()
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    config.reset()
    root.handlers[:] = handlers
    root.setLevel(level)
