"""
Raw OS readers used by the processes scraper, plus the per-platform
capability table that decides which metrics are attempted at all.
"""
from __future__ import annotations

import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Protocol

import psutil

from errors import ProcessStatusError
from models import MiscStats
from utils import seconds_to_ns

PROC_ROOT = "/proc"

_COUNT_PLATFORMS = frozenset({"linux", "darwin", "freebsd", "openbsd", "sunos", "solaris"})
_CREATED_PLATFORMS = frozenset({"linux", "openbsd"})


class ProcessHandle(Protocol):
    def status(self) -> str:
        ...


class PsutilProcessHandle:
    """Live process handle; psutil failures surface as ProcessStatusError."""

    def __init__(self, process: psutil.Process) -> None:
        self._process = process

    @property
    def pid(self) -> int:
        return self._process.pid

    def status(self) -> str:
        try:
            return self._process.status()
        except psutil.Error as e:
            raise ProcessStatusError(f"pid {self._process.pid}: {e}") from e


def list_processes() -> list[ProcessHandle]:
    return [PsutilProcessHandle(p) for p in psutil.process_iter()]


def _parse_proc_stat(text: str) -> dict[str, int]:
    wanted = {"processes", "procs_running", "procs_blocked"}
    values: dict[str, int] = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[0] in wanted:
            values[parts[0]] = int(parts[1])
    missing = wanted - values.keys()
    if missing:
        raise ValueError(f"missing fields in stat: {sorted(missing)}")
    return values


def _parse_loadavg_total(text: str) -> int:
    # "0.20 0.18 0.12 1/80 11206": fourth field is running/total
    fields = text.split()
    if len(fields) < 4 or "/" not in fields[3]:
        raise ValueError(f"unexpected loadavg format: {text.strip()!r}")
    return int(fields[3].split("/", 1)[1])


def read_misc_stats(proc_root: str | Path = PROC_ROOT) -> MiscStats:
    """Aggregate process counters from <proc_root>/stat and <proc_root>/loadavg."""
    root = Path(proc_root)
    stat = _parse_proc_stat((root / "stat").read_text(encoding="utf-8"))
    total = _parse_loadavg_total((root / "loadavg").read_text(encoding="utf-8"))
    return MiscStats(
        procs_created=stat["processes"],
        procs_running=stat["procs_running"],
        procs_blocked=stat["procs_blocked"],
        procs_total=total,
    )


CommandRunner = Callable[[list[str]], str]

_FORK_FIELDS = ("forks", "vforks", "tforks")


def run_command(cmd: list[str], timeout_sec: float = 5.0) -> str:
    """Stdout of a command; a non-zero exit raises CalledProcessError."""
    out = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout_sec, check=True)
    return out.stdout or ""


def _parse_forkstat(text: str) -> int:
    # "kern.forkstat.forks=12345" per line
    values: dict[str, int] = {}
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        name = key.strip().rsplit(".", 1)[-1]
        if name in _FORK_FIELDS:
            values[name] = int(value.strip())
    if not values:
        raise ValueError(f"no fork counters in forkstat: {text.strip()!r}")
    return sum(values.values())


def _parse_ps_states(text: str) -> tuple[int, int, int]:
    """(running, blocked, total) from `ps axo state` output."""
    running = blocked = total = 0
    for line in text.splitlines()[1:]:
        state = line.strip()
        if not state:
            continue
        total += 1
        if state[0] == "R":
            running += 1
        elif state[0] == "D":
            blocked += 1
    return running, blocked, total


def read_openbsd_misc_stats(runner: CommandRunner = run_command) -> MiscStats:
    """Aggregate process counters from `sysctl kern.forkstat` and `ps axo state`."""
    created = _parse_forkstat(runner(["sysctl", "kern.forkstat"]))
    running, blocked, total = _parse_ps_states(runner(["ps", "axo", "state"]))
    return MiscStats(
        procs_created=created,
        procs_running=running,
        procs_blocked=blocked,
        procs_total=total,
    )


def boot_time_ns() -> int:
    return seconds_to_ns(psutil.boot_time())


@dataclass(frozen=True)
class ScraperCapabilities:
    """Which process metrics the current platform can produce."""
    count_by_status: bool = True
    created: bool = True


def resolve_capabilities(system: str | None = None) -> ScraperCapabilities:
    system = (system or platform.system()).lower()
    return ScraperCapabilities(
        count_by_status=system in _COUNT_PLATFORMS,
        created=system in _CREATED_PLATFORMS,
    )


@dataclass
class ProcessReaders:
    """Function boundary to the OS; tests swap in deterministic callables."""
    misc_stats: Callable[[], MiscStats]
    processes: Callable[[], Iterable[ProcessHandle]]
    boot_time: Callable[[], int]

    @classmethod
    def live(cls, system: str | None = None) -> ProcessReaders:
        system = (system or platform.system()).lower()
        misc_stats = read_openbsd_misc_stats if system == "openbsd" else read_misc_stats
        return cls(misc_stats=misc_stats, processes=list_processes, boot_time=boot_time_ns)
