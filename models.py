"""
Data models for Host Telemetry: resource attributes, process status labels,
raw counter snapshots and the metric records emitted by scrapers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

AttributeValue = str | int | bool

# Resource attribute keys and schema (semantic conventions v1.5.0)
HOST_NAME = "host.name"
OS_TYPE = "os.type"
SCHEMA_URL = "https://opentelemetry.io/schemas/v1.5.0"


class ProcessStatus(str, Enum):
    """Platform-independent process state label."""
    RUNNING = "running"
    SLEEPING = "sleeping"
    STOPPED = "stopped"
    ZOMBIES = "zombies"
    BLOCKED = "blocked"
    PAGING = "paging"
    IDLE = "idle"
    WAIT = "wait"
    LOCKED = "locked"
    UNKNOWN = "unknown"


class MetricDataType(str, Enum):
    SUM = "sum"


class AggregationTemporality(str, Enum):
    CUMULATIVE = "cumulative"


@dataclass
class Resource:
    """Attribute set describing the entity that produced the telemetry."""
    attributes: dict[str, AttributeValue] = field(default_factory=dict)

    def set(self, key: str, value: AttributeValue) -> None:
        self.attributes[key] = value

    def insert(self, key: str, value: AttributeValue) -> bool:
        """Add key only if it is not present yet. Returns True if inserted."""
        if key in self.attributes:
            return False
        self.attributes[key] = value
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.attributes

    def __len__(self) -> int:
        return len(self.attributes)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.attributes)


@dataclass
class MiscStats:
    """Aggregate process counters read in one call (Linux: /proc/stat + /proc/loadavg)."""
    procs_created: int = 0
    procs_running: int = 0
    procs_blocked: int = 0
    procs_total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "procs_created": self.procs_created,
            "procs_running": self.procs_running,
            "procs_blocked": self.procs_blocked,
            "procs_total": self.procs_total,
        }


@dataclass
class NumberDataPoint:
    """Single integer observation. Times are nanoseconds since the epoch."""
    value: int
    start_time: int = 0
    timestamp: int = 0
    attributes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "start_time": self.start_time,
            "timestamp": self.timestamp,
            "attributes": dict(self.attributes),
        }


@dataclass
class Metric:
    """Typed metric record with its data points."""
    name: str
    description: str = ""
    unit: str = ""
    data_type: MetricDataType = MetricDataType.SUM
    is_monotonic: bool = False
    aggregation_temporality: AggregationTemporality = AggregationTemporality.CUMULATIVE
    data_points: list[NumberDataPoint] = field(default_factory=list)

    def add_point(
        self,
        value: int,
        start_time: int,
        timestamp: int,
        attributes: dict[str, str] | None = None,
    ) -> NumberDataPoint:
        point = NumberDataPoint(
            value=int(value),
            start_time=start_time,
            timestamp=timestamp,
            attributes=dict(attributes or {}),
        )
        self.data_points.append(point)
        return point

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "unit": self.unit,
            "data_type": self.data_type.value,
            "is_monotonic": self.is_monotonic,
            "aggregation_temporality": self.aggregation_temporality.value,
            "data_points": [p.to_dict() for p in self.data_points],
        }
