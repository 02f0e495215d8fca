# flow_monitor/cli.py
from __future__ import annotations
import argparse
import logging
import threading
from typing import Optional, Sequence

import uvicorn

from .api import routes
from .core.errors import ConfigWriteError, EngineLaunchError, FormatError
from .core.settings import get_settings
from .logging_setup import setup_logging
from .main import app
from .managers.engine_runner import PrometheusRunner
from .monitoring_service import MonitoringService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="flow-monitor",
        description="Serve the registration API and run Prometheus against the generated config",
    )
    p.add_argument("--host", default=None, help="API listen address (default: FLOW_MONITOR_HOST or 0.0.0.0)")
    p.add_argument("--port", type=int, default=None, help="API listen port (default: FLOW_MONITOR_PORT or 8080)")
    p.add_argument("--no-engine", action="store_true", help="Serve the API only, Prometheus is run elsewhere")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    host = args.host if args.host is not None else settings.host
    port = args.port if args.port is not None else settings.port

    service = MonitoringService(settings=settings)
    routes.set_monitoring_service(service)

    # Prometheus needs a config file before it starts
    try:
        service.write_config()
    except (FormatError, ConfigWriteError) as e:
        logger.error(f"Could not write initial config: {e}")

    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level=settings.log_level.lower()))
    if args.no_engine:
        server.run()
        return 0

    api_thread = threading.Thread(target=server.run, name="flow-monitor-api", daemon=True)
    api_thread.start()

    runner = PrometheusRunner(settings.engine_command())
    try:
        runner.run()
    except EngineLaunchError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
