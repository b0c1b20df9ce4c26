"""Host capability table.

Behaviour that depends on the operating system is resolved once per host
into a :class:`HostPlatform` and dispatched on its flags, instead of
branching on OS names throughout the code.
"""

from __future__ import annotations

import logging
import platform as _platform
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

LOG = logging.getLogger(__name__)

OS_RELEASE = Path("/etc/os-release")


class OSFamily(Enum):
    LINUX = "linux"
    DARWIN = "darwin"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "OSFamily | str | None") -> "OSFamily":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.OTHER


class PersistStyle(Enum):
    """Boot-time route file conventions we know how to render."""

    NETWORK_SCRIPTS = "network-scripts"
    UNSUPPORTED = "unsupported"


# Platforms whose network startup reads /etc/sysconfig/network-scripts/route-<dev>.
NETWORK_SCRIPTS_PLATFORMS = frozenset(
    {
        "centos",
        "redhat",
        "fedora",
        "xenserver",
        "rhel",
        "rocky",
        "almalinux",
    }
)


@dataclass(frozen=True)
class HostPlatform:
    """Capabilities of the host being reconciled."""

    os_family: OSFamily
    platform_name: str
    supports_live_table_read: bool
    persist_style: PersistStyle

    @classmethod
    def resolve(
        cls, os_family: "OSFamily | str | None", platform_name: Optional[str]
    ) -> "HostPlatform":
        family = OSFamily.parse(os_family)
        name = (platform_name or "").strip().lower()
        if family is OSFamily.LINUX and name in NETWORK_SCRIPTS_PLATFORMS:
            style = PersistStyle.NETWORK_SCRIPTS
        else:
            style = PersistStyle.UNSUPPORTED
        return cls(
            os_family=family,
            platform_name=name,
            supports_live_table_read=family is OSFamily.LINUX,
            persist_style=style,
        )


def read_os_release_id(path: Path = OS_RELEASE) -> Optional[str]:
    """Return the ``ID`` field of an os-release file, if readable."""

    try:
        content = path.read_text()
    except OSError as exc:
        LOG.debug("unable to read %s: %s", path, exc)
        return None

    for line in content.splitlines():
        if line.startswith("ID="):
            return line.split("=", 1)[1].strip().strip('"').lower() or None
    return None


def detect_host(os_release: Path = OS_RELEASE) -> HostPlatform:
    """Best-effort detection of the local host's capabilities."""

    system = _platform.system().lower()
    name = read_os_release_id(os_release) if system == "linux" else system
    host = HostPlatform.resolve(system, name)
    LOG.debug("Detected host platform: %s", host)
    return host
