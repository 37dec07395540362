#!/usr/bin/env python3
"""
Monitor the availability of a single host with ICMP echo requests.

Logs a warning when the success rate over the last samples drops below the
degraded threshold, another when it drops below the lost threshold, and the
elapsed time once the service recovers.
"""

import argparse
import sys

from decouple import config
from pydantic import ValidationError

from automation.lib.logging_setup import setup_logging
from pingmonitor.automation.availability import AvailabilityTracker
from pingmonitor.automation.icmp_probe import IcmpProbe
from pingmonitor.automation.monitor_loop import AvailabilityMonitor
from pingmonitor.automation.monitor_models import MonitorSettings

USAGE = "Usage: pingmonitor n.n.n.n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pingmonitor",
        description="Monitor host availability with ICMP echo requests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Probe the default gateway every 5 seconds
  pingmonitor 192.168.1.1

  # Faster probing, ten samples and stop
  pingmonitor 8.8.8.8 --interval-ms 1000 --count 10

Environment (or .env):
  PINGMONITOR_INTERVAL_MS, PINGMONITOR_TIMEOUT_MS, PINGMONITOR_PAYLOAD_SIZE,
  PINGMONITOR_PRIVILEGED, PINGMONITOR_LOG_DIR, PINGMONITOR_CONSOLE_LEVEL
        """
    )
    parser.add_argument("address", nargs="?", default="", help="Host name or IP address to monitor")
    parser.add_argument(
        "--interval-ms",
        type=int,
        default=config("PINGMONITOR_INTERVAL_MS", default=5000, cast=int),
        help="Delay between probes in milliseconds",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=config("PINGMONITOR_TIMEOUT_MS", default=120, cast=int),
        help="Per-probe timeout in milliseconds",
    )
    parser.add_argument(
        "--payload-size",
        type=int,
        default=config("PINGMONITOR_PAYLOAD_SIZE", default=32, cast=int),
        help="ICMP payload size in bytes",
    )
    parser.add_argument(
        "--privileged",
        action="store_true",
        default=config("PINGMONITOR_PRIVILEGED", default=False, cast=bool),
        help="Use raw ICMP sockets (requires root)",
    )
    parser.add_argument(
        "--log-dir",
        default=config("PINGMONITOR_LOG_DIR", default="logs"),
        help="Directory for the debug log file",
    )
    parser.add_argument(
        "--console-level",
        default=config("PINGMONITOR_CONSOLE_LEVEL", default="INFO"),
        help="Minimum level shown on the console",
    )
    parser.add_argument("--count", type=int, default=None, help="Stop after this many probes")
    return parser


def main(argv=None):
    """Parse arguments, set up logging and run the monitor loop."""
    args = build_parser().parse_args(argv)

    if not args.address.strip():
        print(USAGE)
        return 2

    try:
        settings = MonitorSettings(
            address=args.address,
            interval_ms=args.interval_ms,
            timeout_ms=args.timeout_ms,
            payload_size=args.payload_size,
            privileged=args.privileged,
        )
    except ValidationError as e:
        print(f"✗ Invalid settings: {e}", file=sys.stderr)
        return 2

    logger, console = setup_logging(log_dir=args.log_dir, console_level=args.console_level)
    console.info("pingmonitor starting")

    monitor = AvailabilityMonitor(
        probe=IcmpProbe.from_settings(settings),
        tracker=AvailabilityTracker.from_settings(settings),
        interval_s=settings.interval_s,
        log=logger,
        console=console,
    )
    monitor.log_configuration(settings)

    try:
        monitor.run(max_ticks=args.count)
    except KeyboardInterrupt:
        console.info(f"pingmonitor stopping after {monitor.ticks} probes")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
