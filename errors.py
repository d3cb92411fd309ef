"""
Error types shared by detectors, scrapers and configuration.
"""
from __future__ import annotations

from models import Resource


class TelemetryError(Exception):
    """Base class for all Host Telemetry errors."""


class ConfigError(TelemetryError):
    """Invalid configuration value."""


class HostnameSourceError(TelemetryError):
    """A single hostname source could not produce a value."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(message)


class ResourceDetectionError(TelemetryError):
    """
    Detection failed as a whole. The detector produced no attributes, so
    ``resource`` is always empty and ``schema_url`` is always "".
    """

    def __init__(self, message: str) -> None:
        self.resource = Resource()
        self.schema_url = ""
        super().__init__(message)


class ProcessStatusError(TelemetryError):
    """Status of one process could not be read (usually it exited mid-scrape)."""


class ScraperStartError(TelemetryError):
    """Scraper could not initialise its start time."""


class PartialScrapeError(TelemetryError):
    """
    One or more independent collections failed within a tick.

    ``failed`` is the number of metrics that were skipped because of these
    errors; metrics returned next to this error are still valid.
    """

    def __init__(self, errors: list[Exception], failed: int) -> None:
        self.errors = list(errors)
        self.failed = failed
        super().__init__("; ".join(str(e) for e in self.errors))


class ScrapeErrors:
    """Accumulates per-facility failures during a single scrape."""

    def __init__(self) -> None:
        self._errors: list[Exception] = []
        self._failed = 0

    def add_partial(self, failed: int, err: Exception) -> None:
        self._errors.append(err)
        self._failed += failed

    def __len__(self) -> int:
        return len(self._errors)

    def combine(self) -> PartialScrapeError | None:
        if not self._errors:
            return None
        return PartialScrapeError(self._errors, self._failed)
