"""Tests for utils."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils import (
    env_bool,
    env_list,
    format_timestamp_ns,
    now_ns,
    seconds_to_ns,
    setup_logging,
)


def test_format_timestamp_ns() -> None:
    assert format_timestamp_ns(0) == "-"
    assert format_timestamp_ns(100 * 10**9) == "1970-01-01T00:01:40+00:00"


def test_clock_helpers() -> None:
    assert seconds_to_ns(1.5) == 1_500_000_000
    assert now_ns() > seconds_to_ns(1_600_000_000)


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HT_TEST_BOOL", "yes")
    monkeypatch.setenv("HT_TEST_LIST", " dns, ,os ")
    assert env_bool("HT_TEST_BOOL") is True
    assert env_list("HT_TEST_LIST") == ["dns", "os"]
    assert env_list("HT_TEST_UNSET", ["x"]) == ["x"]


def test_setup_logging_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "telemetry.log"
    setup_logging("DEBUG", log_file)
    logging.getLogger("test").debug("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
    setup_logging("WARNING")
