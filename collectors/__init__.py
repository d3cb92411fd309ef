"""
Collectors package: scrapers that turn raw OS state into metrics.
"""
from __future__ import annotations

from collectors.base import BaseScraper, ScrapeResult
from collectors.processes_scraper import ProcessesScraper
from collectors.readers import ProcessReaders, ScraperCapabilities, resolve_capabilities
from collectors.status import StatusClassifier

__all__ = [
    "BaseScraper",
    "ScrapeResult",
    "ProcessesScraper",
    "ProcessReaders",
    "ScraperCapabilities",
    "StatusClassifier",
    "resolve_capabilities",
]
