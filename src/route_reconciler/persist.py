"""Boot-time route file rendering.

Red Hat style network startup reads ``/etc/sysconfig/network-scripts/
route-<device>`` files made of numbered ``ADDRESSn``/``NETMASKn``/``GATEWAYn``
triples.  The files are always regenerated from the full declared route set
so they reflect the declarations rather than the last change applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .codec import prefix_length_to_mask
from .compare import resolve_network
from .config import RouteAction, RouteSpec
from .device import DefaultDevicePolicy
from .errors import UnresolvableDevice, UnsupportedPlatformForPersistence
from .platform import HostPlatform, PersistStyle

LOG = logging.getLogger(__name__)

NETWORK_SCRIPTS_DIR = Path("/etc/sysconfig/network-scripts")


@dataclass
class PersistConfigSet:
    """Per-device config lines, in the order devices were first seen."""

    lines: Dict[str, List[str]] = field(default_factory=dict)

    def ensure_device(self, device: str) -> List[str]:
        return self.lines.setdefault(device, [])

    def devices(self) -> List[str]:
        return list(self.lines)

    def render(self, device: str) -> str:
        return "".join(f"{line}\n" for line in self.lines.get(device, []))

    def items(self) -> Iterable[Tuple[str, str]]:
        for device in self.lines:
            yield device, self.render(device)


@dataclass
class RenderResult:
    """Result of writing one device's route file."""

    device: str
    config_text: str
    output_path: Path
    written: bool


def config_file_contents(position: int, spec: RouteSpec) -> List[str]:
    network = resolve_network(spec.destination, spec.netmask)
    address, netmask = spec.destination, spec.netmask or ""
    if "/" in spec.destination:
        address = str(network.network_address)
        netmask = prefix_length_to_mask(network.prefixlen)

    return [
        f"ADDRESS{position}={address}",
        f"NETMASK{position}={netmask}",
        f"GATEWAY{position}={spec.gateway or ''}",
    ]


class PersistedConfigBuilder:
    """Group declared routes by device and render their file lines."""

    def __init__(self, host: HostPlatform, device_policy: DefaultDevicePolicy) -> None:
        self._host = host
        self._device_policy = device_policy

    def resolve_device(self, spec: RouteSpec) -> str:
        device: Optional[str] = spec.device or self._device_policy.resolve(spec)
        if not device:
            raise UnresolvableDevice(f"no device resolvable for {spec}")
        return device

    def build(self, routes: Sequence[RouteSpec]) -> PersistConfigSet:
        if self._host.persist_style is not PersistStyle.NETWORK_SCRIPTS:
            raise UnsupportedPlatformForPersistence(self._host.platform_name)

        config_set = PersistConfigSet()
        positions: Dict[str, int] = {}
        for spec in routes:
            device = self.resolve_device(spec)
            lines = config_set.ensure_device(device)
            if spec.action is not RouteAction.ADD:
                continue
            position = positions.get(device, 0)
            lines.extend(config_file_contents(position, spec))
            positions[device] = position + 1
        return config_set


class NetworkScriptsWriter:
    """Write ``route-<device>`` files, leaving identical files untouched."""

    def __init__(self, output_dir: Path = NETWORK_SCRIPTS_DIR) -> None:
        self._output_dir = Path(output_dir)

    def path_for(self, device: str) -> Path:
        return self._output_dir / f"route-{device}"

    def write(self, config_set: PersistConfigSet) -> List[RenderResult]:
        results: List[RenderResult] = []
        for device, text in config_set.items():
            path = self.path_for(device)
            written = False
            if not path.exists() or path.read_text() != text:
                self._output_dir.mkdir(parents=True, exist_ok=True)
                path.write_text(text)
                written = True
                LOG.debug("writing route-%s\n%s", device, text)
            else:
                LOG.debug("route-%s already up to date", device)
            results.append(
                RenderResult(
                    device=device,
                    config_text=text,
                    output_path=path,
                    written=written,
                )
            )
        return results
