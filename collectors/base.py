"""
Base scraper interface: all metric scrapers implement this.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from models import Metric


@dataclass
class ScrapeResult:
    """
    Result from a single scrape: the metrics that were collected and an optional
    error. An error does not invalidate the metrics; they are partial output.
    """
    metrics: list[Metric] = field(default_factory=list)
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": [m.to_dict() for m in self.metrics],
            "error": str(self.error) if self.error else None,
            "failed": getattr(self.error, "failed", None),
        }


class BaseScraper(ABC):
    """Abstract base for all metric scrapers. The caller owns the tick schedule."""

    name: str = "base"

    def start(self) -> None:
        """Prepare for scraping. Called once before the first scrape."""

    @abstractmethod
    def scrape(self) -> ScrapeResult:
        """Run one collection tick. Facility failures are reported in ScrapeResult.error."""
        ...

    def scrape_safe(self) -> ScrapeResult:
        """Wrapper that catches unexpected exceptions and returns an empty, failed result."""
        try:
            return self.scrape()
        except Exception as e:
            return ScrapeResult(metrics=[], error=e)
