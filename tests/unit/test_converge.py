from pathlib import Path
from typing import List

import pytest

from route_agent.converge import converge
from route_reconciler.config import RouteAction, RouteSpec
from route_reconciler.driver import RouteReconciler
from route_reconciler.errors import ConflictingMaskSpecification
from route_reconciler.persist import NetworkScriptsWriter
from route_reconciler.platform import HostPlatform
from route_reconciler.runner import CommandResult
from route_reconciler.table import RouteTableReader

HEADER = "Iface\tDestination\tGateway \tFlags\tRefCnt\tUse\tMetric\tMask\t\tMTU\tWindow\tIRTT\n"


class RecordingRunner:
    def __init__(self):
        self.commands: List[str] = []

    def run(self, command: str) -> CommandResult:
        self.commands.append(command)
        return CommandResult(command=command, returncode=0)


def build_reconciler(tmp_path: Path, runner: RecordingRunner, platform: str = "fedora") -> RouteReconciler:
    table = tmp_path / "route"
    table.write_text(HEADER + "eth0\t0000000A\t0100000A\t0003\t0\t0\t0\t00FFFFFF\t0\t0\t0\n")
    return RouteReconciler(
        HostPlatform.resolve("linux", platform),
        runner=runner,
        reader=RouteTableReader(table),
        writer=NetworkScriptsWriter(tmp_path / "network-scripts"),
    )


def test_converge_runs_every_route_in_order(tmp_path: Path):
    runner = RecordingRunner()
    routes = [
        RouteSpec("10.0.0.0", "255.255.255.0", "10.0.0.1"),
        RouteSpec("10.1.0.0", "255.255.255.0", "10.0.0.1", "eth0"),
        RouteSpec("10.2.0.0", "255.255.255.0", action=RouteAction.DELETE),
    ]

    report = converge(build_reconciler(tmp_path, runner), routes)

    assert len(report.results) == 3
    assert report.updated_count == 1
    assert runner.commands == ["ip route replace 10.1.0.0/24 via 10.0.0.1 dev eth0"]
    assert (tmp_path / "network-scripts" / "route-eth0").read_text().count("ADDRESS") == 2


def test_converge_stops_at_first_failure(tmp_path: Path):
    runner = RecordingRunner()
    routes = [
        RouteSpec("10.0.0.0/24", "255.255.255.0"),
        RouteSpec("10.1.0.0", "255.255.255.0", "10.0.0.1", "eth0"),
    ]

    with pytest.raises(ConflictingMaskSpecification):
        converge(build_reconciler(tmp_path, runner), routes)

    assert runner.commands == []


def test_converge_collects_persistence_warnings(tmp_path: Path):
    runner = RecordingRunner()
    routes = [
        RouteSpec("10.1.0.0", "255.255.255.0", "10.0.0.1", "eth0"),
        RouteSpec("10.3.0.0", "255.255.255.0", "10.0.0.1", "eth0"),
    ]

    report = converge(build_reconciler(tmp_path, runner, platform="ubuntu"), routes)

    assert len(report.warnings) == 1


def test_converge_validates_every_declaration_first(tmp_path: Path):
    runner = RecordingRunner()
    routes = [
        RouteSpec("10.1.0.0", "255.255.255.0", "10.0.0.1", "eth0"),
        RouteSpec("10.0.0.0/24", "255.255.255.0"),
    ]
    reconciler = build_reconciler(tmp_path, runner)

    with pytest.raises(ConflictingMaskSpecification, match=r"10\.0\.0\.0/24"):
        converge(reconciler, routes)

    assert runner.commands == []
    assert not (tmp_path / "network-scripts").exists()
