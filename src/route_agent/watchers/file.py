"""File-based route declaration watcher."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Event, Thread
from typing import Callable, List, Optional, Sequence

import yaml

from route_reconciler.config import RouteSpec

from ..config import parse_config

LOG = logging.getLogger(__name__)


class FileRouteWatcher(Thread):
    """Poll the agent configuration and converge when its routes change."""

    def __init__(
        self,
        path: Path,
        on_change: Callable[[Sequence[RouteSpec]], object],
        interval: float,
        stop_event: Event,
    ) -> None:
        super().__init__(daemon=True)
        self._path = Path(path)
        self._on_change = on_change
        self._interval = interval
        self._stop_event = stop_event
        self._state: Optional[List[RouteSpec]] = None

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll()
            except Exception:
                LOG.exception("route watcher encountered an error")
            self._stop_event.wait(self._interval)

    def poll(self) -> bool:
        """Converge if the declared routes changed; return whether it did."""

        if not self._path.exists():
            LOG.debug("config file %s does not exist yet", self._path)
            return False

        try:
            config = parse_config(yaml.safe_load(self._path.read_text()))
        except yaml.YAMLError as exc:
            LOG.warning("failed to parse config file %s: %s", self._path, exc)
            return False
        except ValueError as exc:
            LOG.warning("invalid config file %s: %s", self._path, exc)
            return False

        desired = list(config.routes)
        if desired == self._state:
            return False

        LOG.debug("declared routes changed: %s", desired)
        self._on_change(desired)
        self._state = desired
        return True
