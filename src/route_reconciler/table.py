"""Reader for the Linux ``/proc/net/route`` table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional

from .codec import decode_hex
from .compare import RouteLike, equivalent
from .config import LiveRoute
from .errors import MalformedAddress

LOG = logging.getLogger(__name__)

PROC_ROUTE_TABLE = Path("/proc/net/route")

PROC_FIELDS = (
    "iface",
    "destination",
    "gateway",
    "flags",
    "refcnt",
    "use",
    "metric",
    "mask",
    "mtu",
    "window",
    "irtt",
)
HEADER_MARKER = "IRTT"


def parse_route_line(line: str) -> Optional[LiveRoute]:
    """Parse one table row; returns ``None`` for the header and blank lines."""

    values = line.split()
    if not values:
        return None
    if len(values) != len(PROC_FIELDS):
        raise MalformedAddress(
            f"route table row has {len(values)} fields, expected "
            f"{len(PROC_FIELDS)}: {line.strip()!r}"
        )

    row = dict(zip(PROC_FIELDS, values))
    if row["irtt"] == HEADER_MARKER:
        return None

    try:
        flags = int(row["flags"], 16)
        metric = int(row["metric"])
    except ValueError as exc:
        raise MalformedAddress(f"invalid route table row {line.strip()!r}") from exc

    return LiveRoute(
        destination=decode_hex(row["destination"]),
        netmask=decode_hex(row["mask"]),
        gateway=decode_hex(row["gateway"]),
        device=row["iface"],
        flags=flags,
        metric=metric,
    )


class RouteTableReader:
    """Read live routes from a proc-style route table.

    Every call re-reads the file; nothing is cached between calls.
    """

    def __init__(self, path: Path = PROC_ROUTE_TABLE) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_live_routes(self) -> Iterator[LiveRoute]:
        with self._path.open("r") as handle:
            for line in handle:
                route = parse_route_line(line)
                if route is not None:
                    yield route

    def find_matching(self, spec: RouteLike) -> Optional[LiveRoute]:
        """Return the first live route equivalent to ``spec`` in table order."""

        routes = self.read_live_routes()
        try:
            for route in routes:
                if equivalent(spec, route):
                    LOG.debug("%s matches live route %s", spec, route)
                    return route
        finally:
            routes.close()
        return None
