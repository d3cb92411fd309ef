"""
Processes scraper: process counts by state and the number of processes created.

Each facility (aggregate counters, process enumeration) is collected
independently. A facility that fails is reported in a PartialScrapeError and
only its metric is skipped. A single process whose status cannot be read is
dropped from the tally without being reported.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Callable

from collectors.base import BaseScraper, ScrapeResult
from collectors.metadata import STATUS_ATTRIBUTE, SYSTEM_PROCESSES_COUNT, SYSTEM_PROCESSES_CREATED
from collectors.readers import ProcessReaders, ScraperCapabilities, resolve_capabilities
from collectors.status import StatusClassifier
from errors import ScrapeErrors, ScraperStartError
from models import Metric, MiscStats, ProcessStatus
from utils import get_logger, now_ns

TYPE_STR = "processes"


class ProcessesScraper(BaseScraper):
    name = TYPE_STR

    def __init__(
        self,
        readers: ProcessReaders | None = None,
        capabilities: ScraperCapabilities | None = None,
        classifier: StatusClassifier | None = None,
        logger: logging.Logger | None = None,
        clock: Callable[[], int] = now_ns,
    ) -> None:
        self.readers = readers or ProcessReaders.live()
        self.capabilities = capabilities or resolve_capabilities()
        self.classifier = classifier or StatusClassifier()
        self.logger = logger or get_logger(__name__)
        self.clock = clock
        self.start_time = 0

    @property
    def metrics_attempted(self) -> int:
        return int(self.capabilities.count_by_status) + int(self.capabilities.created)

    def start(self) -> None:
        try:
            self.start_time = int(self.readers.boot_time())
        except Exception as e:
            raise ScraperStartError(f"failed getting boot time: {e}") from e

    def scrape(self) -> ScrapeResult:
        now = self.clock()
        errs = ScrapeErrors()

        misc: MiscStats | None = None
        if self.capabilities.created:
            try:
                misc = self.readers.misc_stats()
            except Exception as e:
                errs.add_partial(1, e)

        counts: Counter[ProcessStatus] | None = None
        if self.capabilities.count_by_status:
            try:
                counts = self._count_by_status()
            except Exception as e:
                errs.add_partial(1, e)

        metrics: list[Metric] = []
        if counts is not None:
            metrics.append(self._count_metric(counts, now))
        if misc is not None:
            metrics.append(self._created_metric(misc, now))

        err = errs.combine()
        if err is not None:
            self.logger.debug("processes scrape skipped %d of %d metrics: %s", err.failed, self.metrics_attempted, err)
        return ScrapeResult(metrics=metrics, error=err)

    def _count_by_status(self) -> Counter[ProcessStatus]:
        """Enumeration errors propagate; per-process status errors are dropped."""
        counts: Counter[ProcessStatus] = Counter()
        dropped = 0
        for proc in self.readers.processes():
            try:
                raw = proc.status()
            except Exception:
                # process exited, is not readable, or the handle is broken
                dropped += 1
                continue
            counts[self.classifier.classify(raw)] += 1
        if dropped:
            self.logger.debug("dropped %d processes with unreadable status", dropped)
        return counts

    def _count_metric(self, counts: Counter[ProcessStatus], now: int) -> Metric:
        metric = SYSTEM_PROCESSES_COUNT.new_metric()
        for status in ProcessStatus:
            if counts[status]:
                metric.add_point(counts[status], self.start_time, now, {STATUS_ATTRIBUTE: status.value})
        return metric

    def _created_metric(self, misc: MiscStats, now: int) -> Metric:
        metric = SYSTEM_PROCESSES_CREATED.new_metric()
        metric.add_point(misc.procs_created, self.start_time, now)
        return metric
