#!/usr/bin/env python3
"""Print the live route table decoded, optionally checking a declaration."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from route_reconciler.codec import mask_to_prefix_length  # noqa: E402
from route_reconciler.command import build_command  # noqa: E402
from route_reconciler.config import RouteAction, RouteSpec  # noqa: E402
from route_reconciler.table import PROC_ROUTE_TABLE, RouteTableReader  # noqa: E402


LOG = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--table",
        type=Path,
        default=PROC_ROUTE_TABLE,
        help="Path to a proc-style route table",
    )
    parser.add_argument("--destination", help="Declared destination to look up")
    parser.add_argument("--netmask", help="Declared netmask")
    parser.add_argument("--gateway", help="Declared gateway")
    parser.add_argument("--device", help="Declared device")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    reader = RouteTableReader(args.table)
    for route in reader.read_live_routes():
        prefix = mask_to_prefix_length(route.netmask)
        print(f"{route.destination}/{prefix} via {route.gateway} dev {route.device}")

    if not args.destination:
        return 0

    spec = RouteSpec(
        destination=args.destination,
        netmask=args.netmask,
        gateway=args.gateway,
        device=args.device,
    )
    match = reader.find_matching(spec)
    if match:
        LOG.info("%s is installed on %s", spec, match.device)
        return 0

    LOG.info("%s is missing, would run: %s", spec, build_command(spec, RouteAction.ADD))
    return 1


if __name__ == "__main__":
    sys.exit(main())
