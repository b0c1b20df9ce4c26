"""Rendering of ``ip route`` mutation commands."""

from __future__ import annotations

from typing import Optional

from .codec import mask_to_prefix_length
from .compare import resolve_network
from .config import RouteAction, RouteSpec


def build_command(spec: RouteSpec, action: Optional[RouteAction] = None) -> str:
    """Return the command that applies ``action`` for ``spec``.

    ``add`` uses ``ip route replace`` so re-running it is harmless.  ``delete``
    never names the device.
    """

    action = RouteAction.parse(action or spec.action)
    # Validation only; the destination is rendered as declared.
    resolve_network(spec.destination, spec.netmask)

    common = ""
    if spec.netmask:
        common += f"/{mask_to_prefix_length(spec.netmask)}"
    if spec.gateway:
        common += f" via {spec.gateway}"

    if action is RouteAction.ADD:
        command = f"ip route replace {spec.destination}{common}"
        if spec.device:
            command += f" dev {spec.device}"
    else:
        command = f"ip route delete {spec.destination}{common}"
    return command
