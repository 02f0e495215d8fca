from unittest import mock

from flow_monitor import cli
from flow_monitor.api import routes
from flow_monitor.core.errors import EngineLaunchError


@mock.patch("flow_monitor.cli.PrometheusRunner")
@mock.patch("flow_monitor.cli.uvicorn.Server")
def test_main_writes_config_then_runs_prometheus(mserver, mrunner, tmp_path, monkeypatch):
    config_path = tmp_path / "prometheus.yml"
    monkeypatch.setenv("FLOW_MONITOR_CONFIG_PATH", str(config_path))
    monkeypatch.setattr(routes, "_monitoring_service_instance", None)
    monkeypatch.setenv("SCRAPE_INTERVAL", "10")

    assert cli.main([]) == 0

    assert config_path.read_text(encoding="utf-8") == "\nglobal:\n  scrape_interval: 10s\n"
    command = mrunner.call_args.args[0]
    assert command.startswith(f"prometheus -config.file={config_path} ")
    mrunner.return_value.run.assert_called_once_with()


@mock.patch("flow_monitor.cli.PrometheusRunner")
@mock.patch("flow_monitor.cli.uvicorn.Server")
def test_main_reports_engine_failure(mserver, mrunner, tmp_path, monkeypatch):
    monkeypatch.setenv("FLOW_MONITOR_CONFIG_PATH", str(tmp_path / "prometheus.yml"))
    monkeypatch.setattr(routes, "_monitoring_service_instance", None)
    mrunner.return_value.run.side_effect = EngineLaunchError("prometheus: not found")

    assert cli.main([]) == 1


@mock.patch("flow_monitor.cli.PrometheusRunner")
@mock.patch("flow_monitor.cli.uvicorn.Server")
def test_main_without_engine_serves_api_only(mserver, mrunner, tmp_path, monkeypatch):
    monkeypatch.setenv("FLOW_MONITOR_CONFIG_PATH", str(tmp_path / "prometheus.yml"))
    monkeypatch.setattr(routes, "_monitoring_service_instance", None)

    assert cli.main(["--no-engine", "--port", "9999"]) == 0

    mserver.return_value.run.assert_called_once_with()
    mrunner.assert_not_called()


@mock.patch("flow_monitor.cli.PrometheusRunner")
@mock.patch("flow_monitor.cli.uvicorn.Server")
@mock.patch("flow_monitor.cli.uvicorn.Config")
def test_main_honours_explicit_port_zero(mconfig, mserver, mrunner, tmp_path, monkeypatch):
    monkeypatch.setenv("FLOW_MONITOR_CONFIG_PATH", str(tmp_path / "prometheus.yml"))
    monkeypatch.setenv("FLOW_MONITOR_PORT", "8081")
    monkeypatch.setattr(routes, "_monitoring_service_instance", None)

    assert cli.main(["--no-engine", "--port", "0", "--host", "127.0.0.1"]) == 0

    assert mconfig.call_args.kwargs["port"] == 0
    assert mconfig.call_args.kwargs["host"] == "127.0.0.1"


@mock.patch("flow_monitor.cli.PrometheusRunner")
@mock.patch("flow_monitor.cli.uvicorn.Server")
def test_main_installs_service_for_routes(mserver, mrunner, tmp_path, monkeypatch):
    config_path = tmp_path / "prometheus.yml"
    monkeypatch.setenv("FLOW_MONITOR_CONFIG_PATH", str(config_path))
    monkeypatch.setattr(routes, "_monitoring_service_instance", None)

    cli.main(["--no-engine"])

    assert routes.get_monitoring_service().writer.config_path == config_path
