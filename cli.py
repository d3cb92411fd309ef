"""
Command-line interface for Host Telemetry: collect (table/JSON/watch), detect, validate-config.
"""
from __future__ import annotations

import argparse
import json
import sys
import time

from rich.console import Console

import config
from errors import ConfigError, ScraperStartError
from utils import setup_logging

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_CONFIG = 2


def _print_json(payload: dict, pretty: bool) -> None:
    print(json.dumps(payload, indent=2 if pretty else None))


def cmd_collect(args: argparse.Namespace) -> int:
    from metrics import build_detector, build_scrapers, collect, render

    try:
        detector = build_detector()
        scrapers = build_scrapers()
    except ScraperStartError as e:
        print(f"Failed to start scrapers: {e}", file=sys.stderr)
        return EXIT_PARTIAL

    console = Console()
    interval = args.interval or config.collection_interval_sec()
    try:
        while True:
            report = collect(scrapers, detector)
            if args.json:
                _print_json(report.to_dict(), args.pretty)
            else:
                render(report, console)
            if not args.watch:
                return EXIT_OK if report.success else EXIT_PARTIAL
            time.sleep(interval)
    except KeyboardInterrupt:
        return EXIT_OK


def cmd_detect(args: argparse.Namespace) -> int:
    from metrics import build_detector

    detector = build_detector()
    if detector is None:
        print("System detector is disabled", file=sys.stderr)
        return EXIT_CONFIG
    result = detector.detect_safe()
    if args.json:
        _print_json(result.to_dict(), args.pretty)
    else:
        for key, value in sorted(result.resource.attributes.items()):
            print(f"{key}: {value}")
        if result.schema_url:
            print(f"schema_url: {result.schema_url}")
    if result.error is not None:
        print(result.error, file=sys.stderr)
        return EXIT_PARTIAL
    return EXIT_OK


def cmd_validate_config(args: argparse.Namespace) -> int:
    print("Config file loaded:", args.config_loaded)
    for key in [
        "collection.interval_sec",
        "detectors.system.enabled",
        "detectors.system.hostname_sources",
        "scrapers.processes.enabled",
        "logging.level",
    ]:
        print(f"  {key}: {config.get(key)}")
    config.collection_interval_sec()
    config.system_detector_config()
    print("Config OK")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="host-telemetry", description="Host Telemetry CLI")
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_collect = sub.add_parser("collect", help="Detect resource attributes and scrape metrics once")
    p_collect.add_argument("--json", action="store_true", help="Output JSON")
    p_collect.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    p_collect.add_argument("--watch", action="store_true", help="Repeat every interval until interrupted")
    p_collect.add_argument("--interval", type=float, default=None, help="Watch interval seconds")
    p_collect.set_defaults(run=cmd_collect)

    p_detect = sub.add_parser("detect", help="Run resource detection only")
    p_detect.add_argument("--json", action="store_true", help="Output JSON")
    p_detect.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    p_detect.set_defaults(run=cmd_detect)

    p_validate = sub.add_parser("validate-config", help="Validate and show config")
    p_validate.set_defaults(run=cmd_validate_config)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    args.config_loaded = config.load_config_file(args.config)
    setup_logging(args.log_level or config.log_level(), config.log_file())
    try:
        return args.run(args)
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG


if __name__ == "__main__":
    sys.exit(main())
