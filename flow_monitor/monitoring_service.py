"""
Core logic for flow-monitor.
Applies registrations to the registry and pushes the resulting config to Prometheus.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional
import logging
import threading

from .core.errors import ConfigWriteError, FormatError
from .core.settings import FlowMonitorSettings, get_settings
from .config.renderer import ConfigRenderer
from .config.writer import ConfigWriter
from .managers.prometheus_manager import PrometheusManager
from .models import AlertRule, ScrapeTarget
from .registry.registry import Registry

STATUS_OK = "OK"
STATUS_NOK = "NOK"

# Returned when no reload status is available (render/persist failed or Prometheus unreachable)
FAILURE_STATUS_CODE = 500

# Statuses that cannot carry the JSON body
_BODYLESS_STATUS_CODES = {204, 205, 304}


def _response_status(status_code: int, fallback: int) -> int:
    """Echo the Prometheus status unless the JSON body cannot be sent with it."""
    if status_code < 200 or status_code in _BODYLESS_STATUS_CODES:
        return fallback
    return status_code


@dataclass(frozen=True)
class RegistrationRequest:
    """One registration; empty names mean the corresponding part is absent."""

    service_name: str = ""
    scrape_port: int = 0
    alert_name: str = ""
    alert_if: str = ""
    alert_from: str = ""


@dataclass(frozen=True)
class RegistrationResult:
    status: str
    status_code: int
    target: ScrapeTarget
    rule: AlertRule

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


class MonitoringService:
    """
    Coordinates registry updates, config rendering, config writing and
    Prometheus reloads.

    Every registration runs mutate -> render -> persist -> reload under one lock,
    so concurrent requests never interleave writes to the config file and each
    reload sees a complete config generation.
    """

    def __init__(
        self,
        registry: Optional[Registry] = None,
        writer: Optional[ConfigWriter] = None,
        prom: Optional[PrometheusManager] = None,
        renderer: Optional[ConfigRenderer] = None,
        scrape_interval_source: Optional[Callable[[], str]] = None,
        settings: Optional[FlowMonitorSettings] = None,
    ) -> None:
        self.logger = logging.getLogger(__name__)
        settings = settings or get_settings()

        self.registry = registry or Registry()
        self.writer = writer or ConfigWriter(settings.config_path)
        self.prom = prom or PrometheusManager(settings.prometheus_url, timeout=settings.reload_timeout)
        self.renderer = renderer or ConfigRenderer()
        # Read on every render so a changed environment applies to the next request
        self.scrape_interval_source = scrape_interval_source or (lambda: get_settings().scrape_interval)
        self._lock = threading.Lock()

        self.logger.info(f"Prometheus URL: {self.prom.url}")
        self.logger.info(f"Config path: {self.writer.config_path}")

    def handle(self, request: RegistrationRequest) -> RegistrationResult:
        """
        Apply a registration and refresh Prometheus.

        The config is rendered, written and reloaded even when the request
        registers nothing. Render or write failures skip the reload.

        Returns:
            RegistrationResult with OK/NOK, the HTTP status to answer with, and
            the registered target/rule (default values when absent)
        """
        with self._lock:
            target = ScrapeTarget()
            rule = AlertRule()
            if request.service_name:
                target = self.registry.upsert_target(request.service_name, request.scrape_port) or target
            if request.alert_name:
                rule = self.registry.upsert_rule(request.alert_name, request.alert_if, request.alert_from) or rule

            if not target.name and not rule.name:
                self.logger.debug("Registration without target or alert, refreshing config only")
            else:
                self.logger.info(f"Registered target={target.name or '-'} alert={rule.name or '-'}")

            try:
                self.write_config()
            except (FormatError, ConfigWriteError) as e:
                self.logger.error(f"Config not updated, skipping Prometheus reload: {e}")
                return RegistrationResult(STATUS_NOK, FAILURE_STATUS_CODE, target, rule)

            result = self.prom.reload_config()

        if result.ok:
            return RegistrationResult(STATUS_OK, _response_status(result.status_code, 200), target, rule)
        return RegistrationResult(STATUS_NOK, _response_status(result.status_code, FAILURE_STATUS_CODE), target, rule)

    def render_config(self) -> str:
        """
        Render the config for the current registry state.

        Raises:
            FormatError: the configured scrape interval is not an integer
        """
        return self.renderer.render(
            self.registry.list_targets(),
            self.registry.list_rules(),
            self.scrape_interval_source(),
        )

    def write_config(self):
        """
        Render the current registry state and write it to the config file.

        Raises:
            FormatError: nothing is written
            ConfigWriteError: the file could not be written
        """
        return self.writer.persist(self.render_config())
