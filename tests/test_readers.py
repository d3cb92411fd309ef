"""Tests for raw OS readers and platform capabilities."""
from __future__ import annotations

import sys
from pathlib import Path

import psutil
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from collectors.readers import (
    ProcessReaders,
    PsutilProcessHandle,
    ScraperCapabilities,
    read_misc_stats,
    read_openbsd_misc_stats,
    resolve_capabilities,
)
from errors import ProcessStatusError
from models import MiscStats

PROC_STAT = """cpu  2255 34 2290 22625563 6290 127 456 0 0 0
cpu0 1132 34 1441 11311718 3675 127 438 0 0 0
intr 114930548 113199788 3 0 5 263 0 4 [... lots more numbers ...]
ctxt 1990473
btime 1062191376
processes 2915
procs_running 1
procs_blocked 0
"""

PROC_LOADAVG = "0.20 0.18 0.12 1/80 11206\n"


def _proc_root(tmp_path: Path, stat: str = PROC_STAT, loadavg: str = PROC_LOADAVG) -> Path:
    (tmp_path / "stat").write_text(stat, encoding="utf-8")
    (tmp_path / "loadavg").write_text(loadavg, encoding="utf-8")
    return tmp_path


def test_read_misc_stats(tmp_path: Path) -> None:
    stats = read_misc_stats(_proc_root(tmp_path))
    assert stats == MiscStats(procs_created=2915, procs_running=1, procs_blocked=0, procs_total=80)


def test_read_misc_stats_missing_field(tmp_path: Path) -> None:
    root = _proc_root(tmp_path, stat="processes 10\nprocs_running 2\n")
    with pytest.raises(ValueError, match="procs_blocked"):
        read_misc_stats(root)


def test_read_misc_stats_bad_loadavg(tmp_path: Path) -> None:
    root = _proc_root(tmp_path, loadavg="0.20 0.18 0.12\n")
    with pytest.raises(ValueError, match="loadavg"):
        read_misc_stats(root)


def test_read_misc_stats_missing_files(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_misc_stats(tmp_path)


OPENBSD_FORKSTAT = """kern.forkstat.forks=1200
kern.forkstat.vforks=30
kern.forkstat.tforks=4
kern.forkstat.kthreads=12
kern.forkstat.fork_pages=88000
"""

OPENBSD_PS = """STAT
Rs
R+
Ss
D
Is
Z
"""


def _fake_runner(outputs: dict[str, str]):
    calls: list[list[str]] = []

    def run(cmd: list[str]) -> str:
        calls.append(cmd)
        return outputs[cmd[0]]

    run.calls = calls
    return run


def test_read_openbsd_misc_stats() -> None:
    runner = _fake_runner({"sysctl": OPENBSD_FORKSTAT, "ps": OPENBSD_PS})
    stats = read_openbsd_misc_stats(runner)
    assert stats == MiscStats(procs_created=1234, procs_running=2, procs_blocked=1, procs_total=6)
    assert runner.calls == [["sysctl", "kern.forkstat"], ["ps", "axo", "state"]]


def test_read_openbsd_misc_stats_without_fork_counters() -> None:
    runner = _fake_runner({"sysctl": "kern.forkstat: unknown\n", "ps": OPENBSD_PS})
    with pytest.raises(ValueError, match="forkstat"):
        read_openbsd_misc_stats(runner)


def test_read_openbsd_misc_stats_command_failure() -> None:
    def failing(cmd: list[str]) -> str:
        raise FileNotFoundError(cmd[0])

    with pytest.raises(OSError):
        read_openbsd_misc_stats(failing)


def test_live_readers_pick_misc_reader_by_platform() -> None:
    assert ProcessReaders.live("OpenBSD").misc_stats is read_openbsd_misc_stats
    assert ProcessReaders.live("Linux").misc_stats is read_misc_stats


def test_resolve_capabilities() -> None:
    assert resolve_capabilities("Linux") == ScraperCapabilities(count_by_status=True, created=True)
    assert resolve_capabilities("Darwin") == ScraperCapabilities(count_by_status=True, created=False)
    assert resolve_capabilities("FreeBSD") == ScraperCapabilities(count_by_status=True, created=False)
    assert resolve_capabilities("OpenBSD") == ScraperCapabilities(count_by_status=True, created=True)
    assert resolve_capabilities("Windows") == ScraperCapabilities(count_by_status=False, created=False)


def test_psutil_handle_wraps_errors() -> None:
    class GoneProcess:
        pid = 4242

        def status(self) -> str:
            raise psutil.NoSuchProcess(4242)

    handle = PsutilProcessHandle(GoneProcess())
    with pytest.raises(ProcessStatusError, match="4242"):
        handle.status()


def test_psutil_handle_current_process() -> None:
    handle = PsutilProcessHandle(psutil.Process())
    assert handle.status() in {
        psutil.STATUS_RUNNING,
        psutil.STATUS_SLEEPING,
        psutil.STATUS_DISK_SLEEP,
        psutil.STATUS_IDLE,
    }


def test_live_readers_are_wired() -> None:
    readers = ProcessReaders.live()
    assert readers.boot_time() > 0
    handles = list(readers.processes())
    assert handles
