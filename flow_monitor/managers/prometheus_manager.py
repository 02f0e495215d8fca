"""
Prometheus manager - triggers config reloads on a running Prometheus over HTTP.

Prometheus itself is started elsewhere (see engine_runner.PrometheusRunner or an
external supervisor); this manager only talks to its lifecycle endpoints.
"""
import logging
from typing import Optional

import requests

from ..models import ReloadResult

logger = logging.getLogger(__name__)

RELOAD_PATH = "/-/reload"
HEALTHY_PATH = "/-/healthy"


class PrometheusManager:
    """
    Manages a Prometheus instance reachable over HTTP.

    Responsibilities:
    - Hot-reload configuration (one attempt, no retry)
    - Check Prometheus health

    Does NOT:
    - Start/stop Prometheus (PrometheusRunner does this)
    - Generate or write config (ConfigRenderer / ConfigWriter do this)
    """

    def __init__(
        self,
        prometheus_url: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            prometheus_url: Base URL of Prometheus (e.g., http://prometheus:9090)
            timeout: Seconds to wait for Prometheus before giving up on a request
            session: HTTP session to use; a fresh requests.Session by default
        """
        self.url = prometheus_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

        logger.info(f"Initialized PrometheusManager for {self.url}")

    def reload_config(self) -> ReloadResult:
        """
        Hot-reload Prometheus configuration via POST /-/reload.

        Any response below 300 counts as success. Connection errors, timeouts
        and malformed URLs give ok=False with status_code 0; other responses
        give ok=False with the real status code.
        """
        try:
            response = self.session.post(f"{self.url}{RELOAD_PATH}", timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error reloading Prometheus at {self.url}: {e}")
            return ReloadResult(ok=False, status_code=0, error=str(e))

        status = response.status_code
        if status < 300:
            logger.info("Prometheus configuration reloaded successfully")
            return ReloadResult(ok=True, status_code=status)

        if status == 404:
            logger.error(
                "Reload failed: Prometheus does not expose /-/reload. "
                "Newer releases need the --web.enable-lifecycle flag."
            )
        else:
            logger.error(f"Failed to reload Prometheus: HTTP {status}")
        return ReloadResult(ok=False, status_code=status, error=f"HTTP {status}")

    def is_healthy(self) -> bool:
        """Check if Prometheus is healthy"""
        try:
            response = self.session.get(f"{self.url}{HEALTHY_PATH}", timeout=self.timeout)
            return response.status_code == 200
        except requests.exceptions.RequestException as e:
            logger.debug(f"Prometheus health check failed: {e}")
            return False
