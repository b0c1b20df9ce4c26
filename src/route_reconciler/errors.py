"""Exceptions raised while reconciling routes."""

from __future__ import annotations

from typing import Optional


class RouteError(Exception):
    """Base class for every error raised by :mod:`route_reconciler`."""


class ConflictingMaskSpecification(RouteError, ValueError):
    """Destination is in CIDR form and a separate netmask was also given."""


class MalformedAddress(RouteError, ValueError):
    """An address (declared or read from the kernel) could not be parsed."""


class InvalidMask(RouteError, ValueError):
    """A netmask is not one of the 33 contiguous IPv4 masks."""


class UnresolvableDevice(RouteError):
    """No device could be determined for a route that needs one."""


class UnsupportedPlatformForPersistence(RouteError):
    """The host platform has no known boot-time route file format."""

    def __init__(self, platform_name: str) -> None:
        super().__init__(
            f"{platform_name or 'unknown platform'} not supported by route "
            "persistence (yet), can't generate a config file"
        )
        self.platform_name = platform_name


class CommandExecutionFailure(RouteError, RuntimeError):
    """The OS rejected a route mutation command."""

    def __init__(
        self,
        command: str,
        returncode: Optional[int],
        stderr: str = "",
    ) -> None:
        detail = stderr or "no error output"
        if returncode is None:
            message = f"could not execute '{command}': {detail}"
        else:
            message = f"'{command}' exited with status {returncode}: {detail}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
