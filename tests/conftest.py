"""
Pytest configuration and shared fixtures for flow-monitor tests.
"""

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import Mock

import pytest

from flow_monitor.config.writer import ConfigWriter
from flow_monitor.managers.prometheus_manager import PrometheusManager
from flow_monitor.models import ReloadResult
from flow_monitor.monitoring_service import MonitoringService


# --- tiny in-process "Prometheus" for tests -----------------------------------

def free_port():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    _, port = s.getsockname()
    s.close()
    return port


class FakePromHandler(BaseHTTPRequestHandler):
    def _answer(self):
        self.server.requests.append((self.command, self.path))
        status = self.server.reload_status if self.path == "/-/reload" else 200
        self.send_response(status)
        if status in (204, 304):
            self.end_headers()
            return
        body = json.dumps({"status": status}).encode("utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    do_GET = _answer
    do_POST = _answer

    def log_message(self, *a, **k):  # silence
        return


@pytest.fixture
def fake_prom():
    """Fake Prometheus; set .reload_status to change the /-/reload answer."""
    srv = ThreadingHTTPServer(("127.0.0.1", 0), FakePromHandler)
    srv.requests = []
    srv.reload_status = 200
    srv.url = f"http://127.0.0.1:{srv.server_address[1]}"
    t = threading.Thread(target=srv.serve_forever, daemon=True)
    t.start()
    try:
        yield srv
    finally:
        srv.shutdown()
        srv.server_close()


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "prometheus" / "prometheus.yml"


@pytest.fixture
def mock_prom():
    """PrometheusManager stand-in whose reloads succeed with HTTP 200."""
    prom = Mock(spec=PrometheusManager)
    prom.url = "http://prometheus:9090"
    prom.reload_config.return_value = ReloadResult(ok=True, status_code=200)
    prom.is_healthy.return_value = True
    return prom


@pytest.fixture
def service(config_path, mock_prom):
    return MonitoringService(
        writer=ConfigWriter(config_path),
        prom=mock_prom,
        scrape_interval_source=lambda: "5",
    )
