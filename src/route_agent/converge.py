"""Sequential convergence pass over the declared routes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from route_reconciler.compare import validate_route
from route_reconciler.config import RouteSpec
from route_reconciler.driver import ReconcileResult, RouteReconciler
from route_reconciler.errors import RouteError

LOG = logging.getLogger(__name__)


@dataclass
class ConvergenceReport:
    results: List[ReconcileResult] = field(default_factory=list)

    @property
    def updated_count(self) -> int:
        return sum(1 for result in self.results if result.updated)

    @property
    def warnings(self) -> List[str]:
        return list(dict.fromkeys(w for r in self.results for w in r.warnings))


def converge(
    reconciler: RouteReconciler, routes: Sequence[RouteSpec]
) -> ConvergenceReport:
    """Reconcile every declared route in order.

    Each route is reconciled against the full declared list so the
    persisted files always reflect the whole collection.  The first failing
    route aborts the pass.  Every declaration is validated before any of
    them is applied.
    """

    declared = list(routes)
    for spec in declared:
        try:
            validate_route(spec)
        except RouteError:
            LOG.error("Invalid declaration %s", spec)
            raise

    report = ConvergenceReport()
    for spec in declared:
        try:
            report.results.append(reconciler.reconcile(spec, declared))
        except RouteError:
            LOG.error("Failed to reconcile %s", spec)
            raise

    LOG.info(
        "Converged %d routes, %d updated", len(report.results), report.updated_count
    )
    return report
