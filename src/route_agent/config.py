"""YAML configuration loader for the route agent."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import yaml

from route_reconciler.config import RouteSpec
from route_reconciler.persist import NETWORK_SCRIPTS_DIR
from route_reconciler.platform import HostPlatform, detect_host
from route_reconciler.table import PROC_ROUTE_TABLE


@dataclass
class HostConfig:
    os_family: Optional[str] = None
    platform: Optional[str] = None

    def resolve(self) -> HostPlatform:
        """Use the configured identity, detecting whatever is missing."""

        if self.os_family and self.platform:
            return HostPlatform.resolve(self.os_family, self.platform)
        detected = detect_host()
        return HostPlatform.resolve(
            self.os_family or detected.os_family,
            self.platform or detected.platform_name,
        )


@dataclass
class PathsConfig:
    route_table: Path = PROC_ROUTE_TABLE
    network_scripts: Path = NETWORK_SCRIPTS_DIR


@dataclass
class AgentConfig:
    host: HostConfig = field(default_factory=HostConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    routes: Sequence[RouteSpec] = field(default_factory=list)
    dry_run: bool = False
    watch_interval: float = 5.0


def _parse_host(section: dict) -> HostConfig:
    if not isinstance(section, dict):
        raise ValueError("'host' section must be a mapping")
    os_family = section.get("os_family", section.get("os"))
    platform = section.get("platform")
    return HostConfig(
        os_family=str(os_family) if os_family else None,
        platform=str(platform) if platform else None,
    )


def _parse_paths(section: dict) -> PathsConfig:
    if not isinstance(section, dict):
        raise ValueError("'paths' section must be a mapping")
    return PathsConfig(
        route_table=Path(section.get("route_table", PROC_ROUTE_TABLE)),
        network_scripts=Path(section.get("network_scripts", NETWORK_SCRIPTS_DIR)),
    )


def parse_routes(entries: Iterable[dict]) -> List[RouteSpec]:
    routes: List[RouteSpec] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"route #{index} must be a mapping")
        try:
            routes.append(RouteSpec.from_mapping(entry))
        except ValueError as exc:
            raise ValueError(f"route #{index}: {exc}") from exc
    return routes


def parse_config(data: object) -> AgentConfig:
    if not isinstance(data, dict):
        raise ValueError("Agent configuration must be a mapping")

    routes_section = data.get("routes", [])
    if not isinstance(routes_section, list):
        raise ValueError("'routes' section must be a list")

    return AgentConfig(
        host=_parse_host(data.get("host", {})),
        paths=_parse_paths(data.get("paths", {})),
        routes=parse_routes(routes_section),
        dry_run=bool(data.get("dry_run", False)),
        watch_interval=float(data.get("watch_interval", 5.0)),
    )


def load_config(path: Path) -> AgentConfig:
    return parse_config(yaml.safe_load(Path(path).read_text()))
