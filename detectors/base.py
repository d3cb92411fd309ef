"""
Base detector interface: all resource detectors implement this.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from errors import ResourceDetectionError
from models import Resource


@dataclass
class DetectionResult:
    """Result from a single detector: resource attributes, schema URL and optional error."""
    resource: Resource = field(default_factory=Resource)
    schema_url: str = ""
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource": self.resource.to_dict(),
            "schema_url": self.schema_url,
            "error": str(self.error) if self.error else None,
        }


class BaseDetector(ABC):
    """Abstract base for all resource detectors."""

    name: str = "base"

    @abstractmethod
    def detect(self) -> DetectionResult:
        """Resolve resource attributes. Raises ResourceDetectionError when nothing can be attached."""
        ...

    def detect_safe(self) -> DetectionResult:
        """Wrapper that turns a detection failure into an empty, failed result."""
        try:
            return self.detect()
        except ResourceDetectionError as e:
            return DetectionResult(resource=e.resource, schema_url=e.schema_url, error=e)
