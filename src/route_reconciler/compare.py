"""Semantic route equivalence."""

from __future__ import annotations

import ipaddress
from typing import Optional, Protocol

from .codec import mask_to_prefix_length
from .errors import ConflictingMaskSpecification, MalformedAddress

NO_GATEWAY = "0.0.0.0"


class RouteLike(Protocol):
    destination: str
    netmask: Optional[str]
    gateway: Optional[str]
    device: Optional[str]


def resolve_network(
    destination: str, netmask: Optional[str] = None
) -> ipaddress.IPv4Network:
    """Resolve a destination plus optional dotted mask into a network.

    This is the only place declared destinations are parsed, so the
    comparator, the command generator and the config builder all agree on
    what a route means.  Host bits are masked off.
    """

    if "/" in destination and netmask:
        raise ConflictingMaskSpecification(
            f"Cannot modify route[{destination}]: address is in CIDR format "
            f"and netmask {netmask} was also provided"
        )

    if netmask:
        text = f"{destination}/{mask_to_prefix_length(netmask)}"
    else:
        text = destination

    try:
        return ipaddress.IPv4Network(text, strict=False)
    except ValueError as exc:
        raise MalformedAddress(f"'{text}' is not an IPv4 network: {exc}") from exc


def route_network(route: RouteLike) -> ipaddress.IPv4Network:
    return resolve_network(route.destination, route.netmask)


def normalize_gateway(value: Optional[str]) -> Optional[str]:
    """Return the canonical gateway text, ``None`` when there is no gateway.

    The kernel reports directly connected routes with a ``0.0.0.0`` gateway,
    which is the same thing as a declaration without one.
    """

    if not value or value == NO_GATEWAY:
        return None
    try:
        return str(ipaddress.IPv4Address(value))
    except ValueError as exc:
        raise MalformedAddress(f"'{value}' is not an IPv4 gateway") from exc


def validate_route(route: RouteLike) -> None:
    """Raise if ``route`` has an unusable destination, netmask or gateway."""

    route_network(route)
    normalize_gateway(route.gateway)


def equivalent(a: RouteLike, b: RouteLike) -> bool:
    """Return whether ``a`` and ``b`` describe the same route.

    Networks and gateways must be equal.  Devices only have to agree when
    both sides name one: a route declared without a device matches the same
    network and gateway on any device.
    """

    if route_network(a) != route_network(b):
        return False
    if normalize_gateway(a.gateway) != normalize_gateway(b.gateway):
        return False
    return not a.device or not b.device or a.device == b.device
