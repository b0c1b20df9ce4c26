from pathlib import Path

from route_reconciler.config import RouteSpec
from route_reconciler.device import DefaultDevicePolicy
from route_reconciler.platform import (
    HostPlatform,
    OSFamily,
    PersistStyle,
    read_os_release_id,
)
from route_reconciler.table import RouteTableReader

HEADER = "Iface\tDestination\tGateway \tFlags\tRefCnt\tUse\tMetric\tMask\t\tMTU\tWindow\tIRTT\n"


def test_resolve_redhat_family():
    host = HostPlatform.resolve("linux", "CentOS")

    assert host.os_family is OSFamily.LINUX
    assert host.supports_live_table_read is True
    assert host.persist_style is PersistStyle.NETWORK_SCRIPTS


def test_resolve_other_linux_has_no_persistence():
    host = HostPlatform.resolve("linux", "ubuntu")

    assert host.supports_live_table_read is True
    assert host.persist_style is PersistStyle.UNSUPPORTED


def test_resolve_darwin_and_unknown():
    darwin = HostPlatform.resolve("darwin", "mac_os_x")
    other = HostPlatform.resolve("freebsd", "freebsd")

    assert darwin.os_family is OSFamily.DARWIN
    assert darwin.supports_live_table_read is False
    assert other.os_family is OSFamily.OTHER
    assert other.persist_style is PersistStyle.UNSUPPORTED


def test_read_os_release_id(tmp_path: Path):
    os_release = tmp_path / "os-release"
    os_release.write_text('NAME="Fedora Linux"\nID=fedora\nVERSION_ID=40\n')

    assert read_os_release_id(os_release) == "fedora"
    assert read_os_release_id(tmp_path / "missing") is None


def test_default_device_uses_live_route(tmp_path: Path):
    table = tmp_path / "route"
    table.write_text(HEADER + "eth3\t0000000A\t0100000A\t0003\t0\t0\t0\t00FFFFFF\t0\t0\t0\n")
    policy = DefaultDevicePolicy(HostPlatform.resolve("linux", "centos"), RouteTableReader(table))

    assert policy.resolve(RouteSpec(destination="10.0.0.0/24", gateway="10.0.0.1")) == "eth3"
    assert policy.resolve(RouteSpec(destination="10.9.0.0/24", gateway="10.0.0.1")) == "eth0"


def test_default_device_fallbacks():
    spec = RouteSpec(destination="10.0.0.0/24")

    assert DefaultDevicePolicy(HostPlatform.resolve("linux", "centos")).resolve(spec) == "eth0"
    assert DefaultDevicePolicy(HostPlatform.resolve("darwin", "mac_os_x")).resolve(spec) == "en0"
    assert DefaultDevicePolicy(HostPlatform.resolve("solaris", "smartos")).resolve(spec) is None
