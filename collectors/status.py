"""
Process state classification: raw OS status codes -> ProcessStatus labels.

Raw codes come either as the single-letter state reported by the kernel
(ps/proc style, e.g. "R", "D") or as psutil's status names ("running",
"disk-sleep"). Anything unrecognised is classified as unknown so that every
process read lands in exactly one bucket.
"""
from __future__ import annotations

import platform

from models import ProcessStatus

S = ProcessStatus

_LINUX_CODES = {
    "R": S.RUNNING,
    "S": S.SLEEPING,
    "D": S.BLOCKED,
    "T": S.STOPPED,
    "t": S.STOPPED,
    "Z": S.ZOMBIES,
    "W": S.PAGING,
    "I": S.IDLE,
}

_DARWIN_CODES = {
    "R": S.RUNNING,
    "S": S.SLEEPING,
    "U": S.BLOCKED,
    "T": S.STOPPED,
    "Z": S.ZOMBIES,
    "I": S.IDLE,
}

_BSD_CODES = {
    "R": S.RUNNING,
    "S": S.SLEEPING,
    "D": S.BLOCKED,
    "T": S.STOPPED,
    "Z": S.ZOMBIES,
    "I": S.IDLE,
    "W": S.WAIT,
    "L": S.LOCKED,
}

_SOLARIS_CODES = {
    "O": S.RUNNING,
    "R": S.RUNNING,
    "S": S.SLEEPING,
    "T": S.STOPPED,
    "Z": S.ZOMBIES,
    "W": S.WAIT,
}

PLATFORM_CODES: dict[str, dict[str, ProcessStatus]] = {
    "linux": _LINUX_CODES,
    "darwin": _DARWIN_CODES,
    "freebsd": _BSD_CODES,
    "openbsd": _BSD_CODES,
    "netbsd": _BSD_CODES,
    "dragonfly": _BSD_CODES,
    "sunos": _SOLARIS_CODES,
    "solaris": _SOLARIS_CODES,
}

# psutil.STATUS_* values, same on every platform
PSUTIL_NAMES = {
    "running": S.RUNNING,
    "sleeping": S.SLEEPING,
    "disk-sleep": S.BLOCKED,
    "stopped": S.STOPPED,
    "tracing-stop": S.STOPPED,
    "zombie": S.ZOMBIES,
    "idle": S.IDLE,
    "waiting": S.WAIT,
    "locked": S.LOCKED,
}


class StatusClassifier:
    """Maps raw status codes for one platform. The table is chosen once, at construction."""

    def __init__(self, platform_name: str | None = None) -> None:
        self.platform_name = (platform_name or platform.system()).lower()
        self._codes = PLATFORM_CODES.get(self.platform_name, {})

    def classify(self, raw: str | None) -> ProcessStatus:
        if not raw:
            return S.UNKNOWN
        if len(raw) > 1:
            named = PSUTIL_NAMES.get(raw.lower())
            if named is not None:
                return named
        return self._codes.get(raw[0], S.UNKNOWN)
