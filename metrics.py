"""
Run one collection tick: resource detection plus every enabled scraper.
Acts as the minimal host for detectors and scrapers (the caller owns timing).
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

import config
from collectors.base import BaseScraper
from collectors.processes_scraper import ProcessesScraper
from detectors.base import BaseDetector, DetectionResult
from detectors.system import SystemDetector
from models import Metric, Resource
from utils import format_timestamp_ns, get_logger, now_ns

logger = get_logger(__name__)


@dataclass
class CollectionReport:
    """Everything one tick produced: resource context, metrics and per-component errors."""
    resource: Resource = field(default_factory=Resource)
    schema_url: str = ""
    metrics: list[Metric] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    failed_metrics: int = 0
    timestamp: int = 0

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource": self.resource.to_dict(),
            "schema_url": self.schema_url,
            "metrics": [m.to_dict() for m in self.metrics],
            "errors": dict(self.errors),
            "failed_metrics": self.failed_metrics,
            "timestamp": self.timestamp,
        }


def build_detector() -> BaseDetector | None:
    if not config.system_detector_enabled():
        return None
    return SystemDetector(config.system_detector_config(), logger=get_logger("detectors.system"))


def build_scrapers() -> list[BaseScraper]:
    """Configured scrapers, already started."""
    scrapers: list[BaseScraper] = []
    if config.processes_scraper_enabled():
        scrapers.append(ProcessesScraper(logger=get_logger("collectors.processes")))
    for s in scrapers:
        s.start()
    return scrapers


def collect(
    scrapers: list[BaseScraper] | None = None,
    detector: BaseDetector | None = None,
) -> CollectionReport:
    """Detect resource attributes and scrape once. Never raises for collection failures."""
    report = CollectionReport(timestamp=now_ns())

    if detector is not None:
        det: DetectionResult = detector.detect_safe()
        report.resource = det.resource
        report.schema_url = det.schema_url
        if det.error is not None:
            logger.warning("Resource detection %s failed: %s", detector.name, det.error)
            report.errors[f"detector.{detector.name}"] = str(det.error)

    for scraper in scrapers or []:
        res = scraper.scrape_safe()
        report.metrics.extend(res.metrics)
        if res.error is not None:
            failed = getattr(res.error, "failed", 0)
            report.failed_metrics += failed
            logger.warning("Scraper %s skipped %d metric(s): %s", scraper.name, failed, res.error)
            report.errors[f"scraper.{scraper.name}"] = str(res.error)

    return report


def render(report: CollectionReport, console: Console | None = None) -> None:
    """Print a report as rich tables."""
    console = console or Console()

    r_table = Table(title="Resource")
    r_table.add_column("Attribute", style="cyan")
    r_table.add_column("Value", style="green")
    for key, value in sorted(report.resource.attributes.items()):
        r_table.add_row(key, str(value))
    if report.schema_url:
        r_table.add_row("schema_url", report.schema_url)
    console.print(Panel(r_table))

    m_table = Table(title=f"Metrics @ {format_timestamp_ns(report.timestamp)}")
    m_table.add_column("Metric", style="cyan")
    m_table.add_column("Attributes", style="magenta")
    m_table.add_column("Value", style="yellow", justify="right")
    m_table.add_column("Since", style="dim")
    for metric in report.metrics:
        for point in metric.data_points:
            attrs = ", ".join(f"{k}={v}" for k, v in sorted(point.attributes.items())) or "-"
            m_table.add_row(metric.name, attrs, str(point.value), format_timestamp_ns(point.start_time))
    console.print(Panel(m_table))

    for component, message in report.errors.items():
        console.print(f"[red]{component}[/red]: {message}")


def main() -> None:
    """Collect once and print the report."""
    report = collect(build_scrapers(), build_detector())
    render(report)
    if not report.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
