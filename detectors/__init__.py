"""
Detectors package: resource attribute detection for the local host.
"""
from __future__ import annotations

from detectors.base import BaseDetector, DetectionResult
from detectors.system import (
    HostnameSource,
    SystemDetector,
    SystemDetectorConfig,
    SystemMetadataProvider,
    resolve_hostname_sources,
)

__all__ = [
    "BaseDetector",
    "DetectionResult",
    "HostnameSource",
    "SystemDetector",
    "SystemDetectorConfig",
    "SystemMetadataProvider",
    "resolve_hostname_sources",
]
