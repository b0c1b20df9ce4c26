from pathlib import Path

from route_agent.main import main

HEADER = "Iface\tDestination\tGateway \tFlags\tRefCnt\tUse\tMetric\tMask\t\tMTU\tWindow\tIRTT\n"


def write_config(tmp_path: Path, routes: str) -> Path:
    table = tmp_path / "route"
    table.write_text(HEADER)
    config_path = tmp_path / "routes.yaml"
    config_path.write_text(
        f"""
host:
  os_family: linux
  platform: redhat
paths:
  route_table: {table}
  network_scripts: {tmp_path / "network-scripts"}
routes:
{routes}
"""
    )
    return config_path


def test_main_dry_run_persists_config(tmp_path: Path):
    config_path = write_config(
        tmp_path,
        "  - destination: 10.0.0.0\n"
        "    netmask: 255.255.255.0\n"
        "    gateway: 10.0.0.1\n"
        "    device: eth0\n",
    )

    assert main(["--config", str(config_path), "--dry-run"]) == 0
    assert (tmp_path / "network-scripts" / "route-eth0").read_text() == (
        "ADDRESS0=10.0.0.0\nNETMASK0=255.255.255.0\nGATEWAY0=10.0.0.1\n"
    )


def test_main_reports_failures(tmp_path: Path):
    config_path = write_config(
        tmp_path,
        "  - destination: 10.0.0.0/24\n"
        "    netmask: 255.255.255.0\n",
    )

    assert main(["--config", str(config_path), "--dry-run"]) == 1


def test_main_reports_missing_config(tmp_path: Path):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_main_reports_unreadable_route_table(tmp_path: Path):
    config_path = write_config(
        tmp_path,
        "  - destination: 10.0.0.0\n"
        "    netmask: 255.255.255.0\n"
        "    device: eth0\n",
    )
    (tmp_path / "route").unlink()

    assert main(["--config", str(config_path), "--dry-run"]) == 1
