"""
Luxtronik Bank Viewer
=====================

Command-line entry point that reads one register bank from a controller
and prints it as a table.

    python -m luxtronik --host 192.168.0.121:8889 calculations
    python -m luxtronik calculations --watch 3

With --watch the bank is re-read periodically and only changed slots are
printed, until Ctrl+C.

License: MIT
"""

import argparse
import logging
import os
import signal
import sys
import time
from typing import Optional

from .errors import LuxtronikError
from .protocol import DEFAULT_PORT, Session, SessionOptions
from .registers import (
    new_calculations_map,
    new_parameter_map,
    new_visibilities_map,
)

logger = logging.getLogger(__name__)

DEFAULT_HOST = "192.168.0.121:" + DEFAULT_PORT

# bank name -> (map factory, session read method)
BANKS = {
    "parameters": (new_parameter_map, Session.read_parameters),
    "calculations": (new_calculations_map, Session.read_calculations),
    "visibilities": (new_visibilities_map, Session.read_visibilities),
}

# Global running flag for graceful shutdown of --watch
running = True


def signal_handler(sig, frame):
    """Handle Ctrl+C for clean shutdown."""
    global running
    logger.info("Shutdown signal received. Stopping...")
    running = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="luxtronik", description="Luxtronik heat pump register viewer"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=os.environ.get("HEATPUMP_IP", DEFAULT_HOST),
        help="Controller address host[:port] (env HEATPUMP_IP)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Socket timeout for reads and writes [seconds]",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("bank", choices=sorted(BANKS), help="Register bank to read")
    parser.add_argument(
        "--all", action="store_true", help="Also print slots whose raw value is 0"
    )
    parser.add_argument(
        "--watch",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Re-read periodically and print changed slots only",
    )
    return parser


def run(args: argparse.Namespace, session: Optional[Session] = None) -> int:
    """Read and print the requested bank; returns the process exit code."""
    new_map, read_bank = BANKS[args.bank]
    register_map = new_map()

    if session is None:
        timeout = args.timeout
        options = SessionOptions(conn_callback=lambda conn: conn.settimeout(timeout))
        session = Session(args.host, options)

    try:
        session.connect()
        read_bank(session, register_map)
        register_map.print_register_map(only_nonzero=not args.all)
        if args.bank == "calculations":
            print(f"\nFirmware: {register_map.version}")

        while running and args.watch:
            time.sleep(args.watch)
            read_bank(session, register_map)
            print(time.strftime("%Y-%m-%d %H:%M:%S"), "=" * 80)
            print(register_map.format_table(only_nonzero=False, only_changed=True))

    except LuxtronikError as e:
        logger.error(f"{args.bank} read from {args.host} failed: {e}")
        return 1

    finally:
        session.close()

    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.watch:
        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    try:
        return run(args)
    except LuxtronikError as e:
        # Malformed --host ends up here
        logger.error(f"{e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
