"""
Central configuration for Host Telemetry.
Supports defaults, optional config file (YAML), and environment overrides.
"""
from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from detectors.system import DEFAULT_HOSTNAME_SOURCES, SystemDetectorConfig
from errors import ConfigError
from utils import env_bool, env_float, env_list, env_str, get_logger

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

DEFAULTS: dict[str, Any] = {
    "collection": {
        "interval_sec": 10.0,
    },
    "detectors": {
        "system": {
            "enabled": True,
            "hostname_sources": list(DEFAULT_HOSTNAME_SOURCES),
        },
    },
    "scrapers": {
        "processes": {
            "enabled": True,
        },
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}

# -----------------------------------------------------------------------------
# Config file loading (optional YAML)
# -----------------------------------------------------------------------------

_config_overrides: dict[str, Any] = {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _set_path(target: dict[str, Any], key_path: str, value: Any) -> None:
    keys = key_path.split(".")
    d = target
    for k in keys[:-1]:
        d = d.setdefault(k, {})
    d[keys[-1]] = value


def default_config_paths() -> list[Path]:
    return [
        Path(os.getcwd()) / "config.yaml",
        Path(os.getcwd()) / "config.yml",
        Path(__file__).parent / "config.yaml",
        Path.home() / ".host_telemetry" / "config.yaml",
    ]


def load_config_file(path: str | Path | None = None) -> bool:
    """Load optional YAML config. Returns True if loaded."""
    if path is None:
        path = next((p for p in default_config_paths() if p.exists()), None)
    if path is None:
        return False
    path = Path(path).expanduser()
    if not path.exists():
        return False
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return False
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not a mapping", path)
        return False
    global _config_overrides
    _config_overrides = _deep_merge(_config_overrides, data)
    logger.debug("Loaded config file %s", path)
    return True


def reset() -> None:
    """Drop all file overrides (defaults and environment remain)."""
    global _config_overrides
    _config_overrides = {}


# -----------------------------------------------------------------------------
# Environment overrides (take precedence over file)
# -----------------------------------------------------------------------------

def _env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    if "HT_INTERVAL_SEC" in os.environ:
        _set_path(out, "collection.interval_sec", env_float("HT_INTERVAL_SEC", DEFAULTS["collection"]["interval_sec"]))
    if "HT_HOSTNAME_SOURCES" in os.environ:
        _set_path(out, "detectors.system.hostname_sources", env_list("HT_HOSTNAME_SOURCES"))
    if "HT_SYSTEM_DETECTOR" in os.environ:
        _set_path(out, "detectors.system.enabled", env_bool("HT_SYSTEM_DETECTOR", True))
    if "HT_PROCESSES_SCRAPER" in os.environ:
        _set_path(out, "scrapers.processes.enabled", env_bool("HT_PROCESSES_SCRAPER", True))
    if env_str("HT_LOG_LEVEL"):
        _set_path(out, "logging.level", env_str("HT_LOG_LEVEL"))
    if env_str("HT_LOG_FILE"):
        _set_path(out, "logging.file", env_str("HT_LOG_FILE"))
    return out


def merged() -> dict[str, Any]:
    return _deep_merge(_deep_merge(copy.deepcopy(DEFAULTS), _config_overrides), _env_overrides())


def get(key_path: str, default: Any = None) -> Any:
    """Get config value by dot path, e.g. 'detectors.system.hostname_sources'."""
    value: Any = merged()
    for k in key_path.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


# -----------------------------------------------------------------------------
# Typed accessors
# -----------------------------------------------------------------------------

def collection_interval_sec() -> float:
    interval = float(get("collection.interval_sec", 10.0))
    if interval <= 0:
        raise ConfigError(f"collection.interval_sec must be positive, got {interval}")
    return interval


def system_detector_config() -> SystemDetectorConfig:
    """Validated system detector settings; unknown hostname sources raise ConfigError."""
    sources = get("detectors.system.hostname_sources") or []
    if isinstance(sources, str):
        sources = [s.strip() for s in sources.split(",") if s.strip()]
    if not isinstance(sources, list):
        raise ConfigError(f"detectors.system.hostname_sources must be a list, got {type(sources).__name__}")
    cfg = SystemDetectorConfig(hostname_sources=[str(s) for s in sources] or list(DEFAULT_HOSTNAME_SOURCES))
    cfg.validate()
    return cfg


def system_detector_enabled() -> bool:
    return bool(get("detectors.system.enabled", True))


def processes_scraper_enabled() -> bool:
    return bool(get("scrapers.processes.enabled", True))


def log_level() -> str:
    return str(get("logging.level", "INFO"))


def log_file() -> str | None:
    value = get("logging.file")
    return str(value) if value else None
