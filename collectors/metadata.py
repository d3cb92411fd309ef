"""
Descriptors for the metrics emitted by the scrapers in this package.
"""
from __future__ import annotations

from dataclasses import dataclass

from models import AggregationTemporality, Metric, MetricDataType

STATUS_ATTRIBUTE = "status"


@dataclass(frozen=True)
class MetricDescriptor:
    name: str
    description: str
    unit: str
    is_monotonic: bool = False

    def new_metric(self) -> Metric:
        """Empty cumulative sum carrying this descriptor's identity."""
        return Metric(
            name=self.name,
            description=self.description,
            unit=self.unit,
            data_type=MetricDataType.SUM,
            is_monotonic=self.is_monotonic,
            aggregation_temporality=AggregationTemporality.CUMULATIVE,
        )


SYSTEM_PROCESSES_COUNT = MetricDescriptor(
    "system.processes.count",
    "Total number of processes in each state.",
    "{processes}",
    is_monotonic=False,
)

SYSTEM_PROCESSES_CREATED = MetricDescriptor(
    "system.processes.created",
    "Total number of created processes.",
    "{processes}",
    is_monotonic=True,
)
