"""Fallback device selection for routes declared without one."""

from __future__ import annotations

import logging
from typing import Optional

from .compare import RouteLike
from .platform import HostPlatform, OSFamily
from .table import RouteTableReader

LOG = logging.getLogger(__name__)

LINUX_DEFAULT_DEVICE = "eth0"
BSD_DEFAULT_DEVICE = "en0"


class DefaultDevicePolicy:
    """Pick the device a device-less route is persisted under.

    On Linux the live table is consulted first so the route lands in the
    file of the interface it is actually installed on.
    """

    def __init__(
        self, host: HostPlatform, reader: Optional[RouteTableReader] = None
    ) -> None:
        self._host = host
        self._reader = reader

    def resolve(self, spec: RouteLike) -> Optional[str]:
        if self._host.os_family is OSFamily.LINUX:
            if self._reader is not None and self._host.supports_live_table_read:
                running = self._reader.find_matching(spec)
                if running is not None:
                    return running.device
            return LINUX_DEFAULT_DEVICE
        if self._host.os_family is OSFamily.DARWIN:
            return BSD_DEFAULT_DEVICE
        LOG.debug("no default device known for os family %s", self._host.os_family.value)
        return None
