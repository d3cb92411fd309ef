"""
System detector: host name and OS type of the machine we run on.

The host name is resolved through an ordered chain of sources ("dns", "os").
Sources are tried in configured order and the first one that succeeds wins;
failures are logged at DEBUG and the next source is tried. OS type has no
fallback: if it cannot be determined the detection fails outright.
"""
from __future__ import annotations

import logging
import platform
import socket
from dataclasses import dataclass, field
from typing import Callable

from detectors.base import BaseDetector, DetectionResult
from errors import ConfigError, HostnameSourceError, ResourceDetectionError
from models import HOST_NAME, OS_TYPE, SCHEMA_URL, Resource
from utils import get_logger

TYPE_STR = "system"

DEFAULT_HOSTNAME_SOURCES = ("dns", "os")

# platform.system() -> os.type semantic convention value
_OS_TYPES = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
    "freebsd": "freebsd",
    "netbsd": "netbsd",
    "openbsd": "openbsd",
    "dragonfly": "dragonflybsd",
    "sunos": "solaris",
    "aix": "aix",
}


class SystemMetadataProvider:
    """Raw host metadata from the OS. Every method raises on failure."""

    def os_type(self) -> str:
        system = platform.system().strip().lower()
        if not system:
            raise OSError("platform did not report an operating system")
        return _OS_TYPES.get(system, system)

    def hostname(self) -> str:
        name = socket.gethostname()
        if not name:
            raise OSError("empty hostname")
        return name

    def fqdn(self) -> str:
        """Canonical name of this host according to the resolver (/etc/hosts, DNS)."""
        name = self.hostname()
        infos = socket.getaddrinfo(name, None, 0, socket.SOCK_DGRAM, 0, socket.AI_CANONNAME)
        for info in infos:
            canonname = info[3]
            if canonname:
                return canonname
        raise OSError(f"no canonical name found for {name!r}")


@dataclass(frozen=True)
class HostnameSource:
    """One named strategy for resolving the host name."""
    name: str
    resolve: Callable[["SystemDetector"], str]


def _get_fqdn(detector: SystemDetector) -> str:
    try:
        return detector.provider.fqdn()
    except Exception as e:
        raise HostnameSourceError("dns", f"failed getting FQDN: {e}") from e


def _get_hostname(detector: SystemDetector) -> str:
    try:
        return detector.provider.hostname()
    except Exception as e:
        raise HostnameSourceError("os", f"failed getting OS hostname: {e}") from e


_SOURCE_REGISTRY = {
    "dns": _get_fqdn,
    "os": _get_hostname,
}


def resolve_hostname_sources(names: list[str] | tuple[str, ...] | None) -> list[HostnameSource]:
    """
    Turn configured source names into the ordered source chain.
    Empty or missing configuration falls back to ["dns", "os"].
    """
    names = list(names or DEFAULT_HOSTNAME_SOURCES)
    unknown = [n for n in names if n not in _SOURCE_REGISTRY]
    if unknown:
        raise ConfigError(
            f"invalid hostname_sources {unknown}; valid sources are {sorted(_SOURCE_REGISTRY)}"
        )
    return [HostnameSource(name=n, resolve=_SOURCE_REGISTRY[n]) for n in names]


@dataclass
class SystemDetectorConfig:
    hostname_sources: list[str] = field(default_factory=lambda: list(DEFAULT_HOSTNAME_SOURCES))

    def validate(self) -> None:
        resolve_hostname_sources(self.hostname_sources)


class SystemDetector(BaseDetector):
    name = TYPE_STR

    def __init__(
        self,
        config: SystemDetectorConfig | None = None,
        provider: SystemMetadataProvider | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        config = config or SystemDetectorConfig()
        self.provider = provider or SystemMetadataProvider()
        self.logger = logger or get_logger(__name__)
        self._sources = tuple(resolve_hostname_sources(config.hostname_sources))

    @property
    def hostname_sources(self) -> list[str]:
        return [s.name for s in self._sources]

    def detect(self) -> DetectionResult:
        try:
            os_type = self.provider.os_type()
        except Exception as e:
            raise ResourceDetectionError(f"failed getting OS type: {e}") from e

        for source in self._sources:
            try:
                hostname = source.resolve(self)
            except HostnameSourceError as err:
                self.logger.debug("hostname source %r failed: %s", source.name, err)
                continue
            res = Resource()
            res.insert(HOST_NAME, hostname)
            res.insert(OS_TYPE, os_type)
            return DetectionResult(resource=res, schema_url=SCHEMA_URL)

        raise ResourceDetectionError("all hostname sources failed to get hostname")
