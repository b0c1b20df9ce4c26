"""Data structures describing declared and live routes.

:class:`RouteSpec` is the desired state handed over by the convergence pass,
:class:`LiveRoute` is a row of the kernel routing table.  Both expose the
same ``destination``/``netmask``/``gateway``/``device`` attributes so the
comparator can treat them interchangeably.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional


class RouteAction(Enum):
    """Actions a declared route can request."""

    ADD = "add"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: "RouteAction | str") -> "RouteAction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported route action '{value}'") from None


def _optional_text(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class RouteSpec:
    """A declared IPv4 route.

    Attributes
    ----------
    destination:
        Host address, network address or CIDR (``10.0.0.0/24``).
    netmask:
        Optional dotted netmask.  Must not be combined with a CIDR
        destination.
    gateway:
        Optional next hop.
    device:
        Optional outbound interface.  When omitted, a live route on any
        device is accepted as a match.
    action:
        Whether the route should be present or absent.
    """

    destination: str
    netmask: Optional[str] = None
    gateway: Optional[str] = None
    device: Optional[str] = None
    action: RouteAction = RouteAction.ADD

    @property
    def name(self) -> str:
        return self.destination

    @classmethod
    def from_mapping(cls, entry: Mapping[str, object]) -> "RouteSpec":
        destination = _optional_text(entry.get("destination", entry.get("name")))
        if destination is None:
            raise ValueError("route declaration missing 'destination'")

        return cls(
            destination=destination,
            netmask=_optional_text(entry.get("netmask")),
            gateway=_optional_text(entry.get("gateway")),
            device=_optional_text(entry.get("device")),
            action=RouteAction.parse(entry.get("action", RouteAction.ADD)),
        )

    def __str__(self) -> str:
        return f"route[{self.destination}]"


@dataclass(frozen=True)
class LiveRoute:
    """A route read from the kernel routing table."""

    destination: str
    netmask: str
    gateway: str
    device: str
    flags: int = 0
    metric: int = 0
