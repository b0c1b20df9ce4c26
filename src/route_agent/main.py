"""Entry point for the standalone route agent."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from threading import Event

from route_reconciler.driver import RouteReconciler
from route_reconciler.errors import RouteError
from route_reconciler.persist import NetworkScriptsWriter
from route_reconciler.runner import CommandRunner
from route_reconciler.table import RouteTableReader

from .config import AgentConfig, load_config
from .converge import converge
from .watchers import FileRouteWatcher

LOG = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def build_reconciler(config: AgentConfig, dry_run: bool = False) -> RouteReconciler:
    host = config.host.resolve()
    LOG.info(
        "Reconciling routes for %s/%s", host.os_family.value, host.platform_name
    )
    return RouteReconciler(
        host,
        runner=CommandRunner(dry_run=dry_run or config.dry_run),
        reader=RouteTableReader(config.paths.route_table),
        writer=NetworkScriptsWriter(config.paths.network_scripts),
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reconcile declared static routes")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("/etc/route-agent/routes.yaml"),
        help="Path to the agent configuration file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log route commands instead of executing them",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and converge whenever the configuration changes",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        LOG.error("unable to load %s: %s", args.config, exc)
        return 1

    reconciler = build_reconciler(config, dry_run=args.dry_run)

    if not args.watch:
        try:
            report = converge(reconciler, config.routes)
        except (OSError, RouteError) as exc:
            LOG.error("%s", exc)
            return 1
        for warning in report.warnings:
            LOG.warning("%s", warning)
        return 0

    stop_event = Event()
    watcher = FileRouteWatcher(
        path=args.config,
        on_change=lambda routes: converge(reconciler, routes),
        interval=config.watch_interval,
        stop_event=stop_event,
    )

    def _shutdown(signum, frame):  # pragma: no cover - signal handler
        LOG.info("received signal %s, shutting down", signum)
        stop_event.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    watcher.start()
    try:
        while not stop_event.is_set():
            stop_event.wait(1.0)
    except KeyboardInterrupt:  # pragma: no cover - fallback if signal not set
        stop_event.set()

    watcher.join()
    LOG.info("route agent stopped")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
