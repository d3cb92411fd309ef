"""Tests for process status classification."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from collectors.status import PLATFORM_CODES, PSUTIL_NAMES, StatusClassifier
from models import ProcessStatus


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("R", ProcessStatus.RUNNING),
        ("S", ProcessStatus.SLEEPING),
        ("D", ProcessStatus.BLOCKED),
        ("T", ProcessStatus.STOPPED),
        ("t", ProcessStatus.STOPPED),
        ("Z", ProcessStatus.ZOMBIES),
        ("W", ProcessStatus.PAGING),
        ("I", ProcessStatus.IDLE),
    ],
)
def test_linux_codes(raw: str, expected: ProcessStatus) -> None:
    assert StatusClassifier("linux").classify(raw) is expected


def test_platform_specific_codes() -> None:
    assert StatusClassifier("darwin").classify("U") is ProcessStatus.BLOCKED
    assert StatusClassifier("darwin").classify("W") is ProcessStatus.UNKNOWN
    assert StatusClassifier("freebsd").classify("W") is ProcessStatus.WAIT
    assert StatusClassifier("openbsd").classify("L") is ProcessStatus.LOCKED
    assert StatusClassifier("sunos").classify("O") is ProcessStatus.RUNNING


def test_platform_name_is_case_insensitive() -> None:
    assert StatusClassifier("Linux").classify("D") is ProcessStatus.BLOCKED
    assert StatusClassifier("Darwin").platform_name == "darwin"


def test_psutil_names_on_any_platform() -> None:
    for platform_name in ("linux", "darwin", "windows"):
        c = StatusClassifier(platform_name)
        assert c.classify("running") is ProcessStatus.RUNNING
        assert c.classify("disk-sleep") is ProcessStatus.BLOCKED
        assert c.classify("tracing-stop") is ProcessStatus.STOPPED
        assert c.classify("zombie") is ProcessStatus.ZOMBIES
        assert c.classify("waiting") is ProcessStatus.WAIT
        assert c.classify("locked") is ProcessStatus.LOCKED


def test_first_character_of_ps_style_code() -> None:
    assert StatusClassifier("linux").classify("Ss+") is ProcessStatus.SLEEPING
    assert StatusClassifier("linux").classify("R<") is ProcessStatus.RUNNING


@pytest.mark.parametrize("raw", [None, "", "?", "X", "dead", "parked", "waking"])
def test_unrecognised_is_unknown(raw) -> None:
    assert StatusClassifier("linux").classify(raw) is ProcessStatus.UNKNOWN


def test_unsupported_platform_still_classifies() -> None:
    c = StatusClassifier("plan9")
    assert c.classify("R") is ProcessStatus.UNKNOWN
    assert c.classify("sleeping") is ProcessStatus.SLEEPING


def test_tables_only_use_known_labels() -> None:
    for table in [*PLATFORM_CODES.values(), PSUTIL_NAMES]:
        for label in table.values():
            assert label in ProcessStatus
            assert label is not ProcessStatus.UNKNOWN
