"""Static IPv4 route reconciliation.

This package reconciles declared routes against the live kernel routing
table and keeps the boot-time route configuration in sync with the full
declared route set.  It is driven one route at a time by a convergence pass
(see :mod:`route_agent`) and is organised leaf-first:

* :mod:`.codec` converts between the kernel's little-endian hex encoding and
  dotted-quad text and maps dotted netmasks to prefix lengths;
* :mod:`.table` reads ``/proc/net/route`` and finds the live route matching a
  declaration;
* :mod:`.compare` decides whether two routes describe the same thing;
* :mod:`.command` renders the ``ip route`` command for an add/delete;
* :mod:`.persist` renders and writes the per-device ``route-<dev>`` files;
* :mod:`.driver` orchestrates the above for a single declared route.

Nothing here shells out except :class:`.runner.CommandRunner`, so unit tests
can exercise the whole pipeline against fixture files.
"""

from .config import LiveRoute, RouteAction, RouteSpec  # noqa: F401
from .driver import ReconcileResult, ReconcileState, RouteReconciler  # noqa: F401
from .platform import HostPlatform  # noqa: F401

__all__ = [
    "HostPlatform",
    "LiveRoute",
    "ReconcileResult",
    "ReconcileState",
    "RouteAction",
    "RouteReconciler",
    "RouteSpec",
]
