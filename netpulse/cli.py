#!/usr/bin/env python3
"""
Netpulse CLI

Ad-hoc probes and continuous monitoring of a target list.
"""

import argparse
import json
import logging
import sys
import threading
from typing import Any, Dict, List, Optional

from .core.config import ConfigError, Settings, load_settings, load_targets
from .core.logging import setup_logging
from .models import ProbeType
from .probe import probe_target
from .registry import TargetRegistry
from .scheduler import ProbeScheduler
from .sinks import LoggingSink, MultiSink, StatsSink, WebhookSink
from .stats import RollingStats

# Configure logger for CLI
logger = logging.getLogger(__name__)


def run_monitor(targets_file: str, settings: Settings, duration: Optional[float] = None,
                stop_event: Optional[threading.Event] = None) -> Dict[str, Any]:
    """
    Monitor the targets in targets_file until interrupted or duration elapses.

    Args:
        targets_file: YAML or JSON target list
        settings: Engine settings
        duration: Seconds to run, forever when None
        stop_event: Optional event that ends the run when set

    Returns:
        {"data": [...]} with one rolling-stats summary per target
    """
    targets = load_targets(targets_file)
    registry = TargetRegistry()
    registry.replace_all(targets)

    stats = RollingStats(window_ms=settings.stats_window_seconds * 1000)
    sinks = [LoggingSink(), StatsSink(stats)]
    if settings.webhook_url:
        logger.info(f"Forwarding results to {settings.webhook_url}")
        sinks.append(WebhookSink(settings.webhook_url))

    scheduler = ProbeScheduler(
        registry,
        MultiSink(*sinks),
        interval=settings.interval_seconds,
        max_workers=settings.max_workers,
        timeout_ms=settings.timeout_ms,
    )

    stop_event = stop_event or threading.Event()
    scheduler.start()
    try:
        stop_event.wait(duration)
    except KeyboardInterrupt:
        logger.info("Monitoring interrupted by user")
    finally:
        scheduler.stop(timeout=settings.timeout_ms / 1000.0 + 15)

    data: List[Dict[str, Any]] = []
    for target in registry.snapshot():
        summary = stats.summary(target.id).to_dict()
        summary["name"] = target.name
        data.append(summary)
    return {"data": data}


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        prog='netpulse',
        description="Netpulse - Connectivity and latency monitor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One TCP probe
  netpulse probe example.com --port 443

  # One ping
  netpulse probe 1.1.1.1 --type ping

  # Monitor a target list every 5 seconds until Ctrl-C
  netpulse monitor targets.yaml

  # Monitor for a minute and post every result to a webhook
  netpulse monitor targets.yaml --duration 60 --webhook http://localhost:8080/results
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    probe_parser = subparsers.add_parser('probe', help='Run a single on-demand probe')
    probe_parser.add_argument('host', help='Target hostname or IP address')
    probe_parser.add_argument('--port', type=int, default=0, help='TCP port (default: 0)')
    probe_parser.add_argument(
        '--type',
        dest='probe_type',
        choices=[p.value for p in ProbeType],
        default=ProbeType.TCP.value,
        help='Probe method (default: tcp)'
    )
    probe_parser.add_argument('--timeout', type=int, default=2000, help='TCP timeout in milliseconds (default: 2000)')
    probe_parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    monitor_parser = subparsers.add_parser('monitor', help='Probe a target list on a fixed interval')
    monitor_parser.add_argument('targets', help='YAML or JSON file with the target list')
    monitor_parser.add_argument('--config', help='YAML settings file')
    monitor_parser.add_argument('--interval', type=float, help='Seconds between ticks (default: 5)')
    monitor_parser.add_argument('--max-workers', type=int, help='Concurrent probe cap (default: 20)')
    monitor_parser.add_argument('--webhook', help='POST every result as JSON to this URL')
    monitor_parser.add_argument('--duration', type=float, help='Stop after this many seconds')
    monitor_parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'probe':
        setup_logging("WARNING", debug=args.verbose)
        result = probe_target(args.host, args.port, args.probe_type, timeout_ms=args.timeout)
        print(json.dumps(result.to_dict()))
        sys.exit(0 if result.ok else 1)

    if args.command == 'monitor':
        try:
            settings = load_settings(args.config)
        except ConfigError as e:
            print(json.dumps({"error": str(e)}))
            sys.exit(2)

        if args.interval is not None:
            settings.interval_seconds = args.interval
        if args.max_workers is not None:
            settings.max_workers = args.max_workers
        if args.webhook:
            settings.webhook_url = args.webhook

        setup_logging(settings.log_level, debug=args.verbose)

        try:
            result = run_monitor(args.targets, settings, duration=args.duration)
        except ValueError as e:
            logger.error(f"Monitor could not start: {e}")
            print(json.dumps({"error": str(e)}))
            sys.exit(2)

        print(json.dumps(result))
        sys.exit(0)


if __name__ == "__main__":
    main()
