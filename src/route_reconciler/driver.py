"""Reconciliation of a single declared route.

:class:`RouteReconciler` walks a declared route through

``UNKNOWN -> CHECKED -> (NO_ACTION_NEEDED | ACTION_APPLIED) -> CONFIG_REGENERATED``

reading the live table, issuing an ``ip route`` command only when the live
state differs from the declaration, and finally regenerating the boot-time
route files from the full declared set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence

from .command import build_command
from .compare import validate_route
from .config import RouteAction, RouteSpec
from .device import DefaultDevicePolicy
from .errors import UnsupportedPlatformForPersistence
from .persist import NetworkScriptsWriter, PersistedConfigBuilder, RenderResult
from .platform import HostPlatform
from .runner import CommandRunner
from .table import RouteTableReader

LOG = logging.getLogger(__name__)


class ReconcileState(Enum):
    UNKNOWN = auto()
    CHECKED = auto()
    NO_ACTION_NEEDED = auto()
    ACTION_APPLIED = auto()
    CONFIG_REGENERATED = auto()


@dataclass
class ReconcileResult:
    """What happened while reconciling one declared route."""

    spec: RouteSpec
    transitions: List[ReconcileState] = field(
        default_factory=lambda: [ReconcileState.UNKNOWN]
    )
    route_exists: bool = False
    command: Optional[str] = None
    updated: bool = False
    rendered: List[RenderResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def state(self) -> ReconcileState:
        return self.transitions[-1]

    @property
    def outcome(self) -> ReconcileState:
        """``ACTION_APPLIED`` or ``NO_ACTION_NEEDED`` once checked, else ``state``."""

        for state in (ReconcileState.ACTION_APPLIED, ReconcileState.NO_ACTION_NEEDED):
            if state in self.transitions:
                return state
        return self.state

    def advance(self, state: ReconcileState) -> None:
        self.transitions.append(state)


class RouteReconciler:
    """Bring one declared route in line with the kernel, then persist."""

    def __init__(
        self,
        host: HostPlatform,
        runner: Optional[CommandRunner] = None,
        reader: Optional[RouteTableReader] = None,
        writer: Optional[NetworkScriptsWriter] = None,
    ) -> None:
        self._host = host
        self._runner = runner or CommandRunner()
        if not host.supports_live_table_read:
            reader = None
        elif reader is None:
            reader = RouteTableReader()
        self._reader = reader
        self._writer = writer or NetworkScriptsWriter()
        self._builder = PersistedConfigBuilder(
            host, DefaultDevicePolicy(host, self._reader)
        )

    @property
    def host(self) -> HostPlatform:
        return self._host

    # ------------------------------------------------------------------
    # Current state
    # ------------------------------------------------------------------
    def load_current_state(self, spec: RouteSpec) -> bool:
        """Return whether a live route equivalent to ``spec`` exists.

        Hosts without a readable route table report ``False`` so the action
        is always applied.
        """

        LOG.info(
            "Loading current state for %s gateway=%s", spec.name, spec.gateway
        )
        if self._reader is None:
            LOG.debug(
                "live route table unavailable on %s, assuming %s is absent",
                self._host.os_family.value,
                spec.name,
            )
            return False
        return self._reader.find_matching(spec) is not None

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------
    def reconcile(
        self, spec: RouteSpec, declared: Optional[Sequence[RouteSpec]] = None
    ) -> ReconcileResult:
        """Reconcile ``spec`` and regenerate config from ``declared``.

        ``declared`` is the full ordered route collection ``spec`` belongs
        to; it defaults to ``[spec]``.
        """

        declared = list(declared) if declared is not None else [spec]
        result = ReconcileResult(spec=spec)

        validate_route(spec)

        result.route_exists = self.load_current_state(spec)
        result.advance(ReconcileState.CHECKED)

        if spec.action is RouteAction.ADD:
            if result.route_exists:
                LOG.info("Route %s already exists", spec.name)
                result.advance(ReconcileState.NO_ACTION_NEEDED)
            else:
                self._apply(spec, result, "Adding route: %s")
        else:
            if result.route_exists:
                self._apply(spec, result, "Removing route: %s")
            else:
                LOG.debug("Route %s does not exist", spec.name)
                result.advance(ReconcileState.NO_ACTION_NEEDED)

        result.rendered, warning = self.regenerate_config(declared)
        if warning:
            result.warnings.append(warning)
        result.advance(ReconcileState.CONFIG_REGENERATED)
        return result

    def _apply(self, spec: RouteSpec, result: ReconcileResult, message: str) -> None:
        command = build_command(spec)
        LOG.info(message, command)
        result.command = command
        self._runner.run(command)
        result.updated = True
        result.advance(ReconcileState.ACTION_APPLIED)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def regenerate_config(
        self, declared: Sequence[RouteSpec]
    ) -> tuple[List[RenderResult], Optional[str]]:
        """Rewrite the route files for ``declared``.

        Returns the per-device results and, for platforms without a known
        file format, the warning that was logged instead.
        """

        try:
            config_set = self._builder.build(declared)
        except UnsupportedPlatformForPersistence as exc:
            LOG.warning("%s", exc)
            return [], str(exc)
        return self._writer.write(config_set), None
