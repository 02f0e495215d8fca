"""
Configuration settings for flow-monitor.
"""
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class FlowMonitorSettings(BaseSettings):
    """flow-monitor configuration loaded from environment variables."""

    # Prometheus settings
    prometheus_url: str = "http://localhost:9090"
    config_path: Path = Path("/etc/prometheus/prometheus.yml")
    storage_path: Path = Path("/prometheus")
    console_libraries: Path = Path("/usr/share/prometheus/console_libraries")
    console_templates: Path = Path("/usr/share/prometheus/consoles")
    reload_timeout: float = 5.0

    # Kept as a raw string: a non-numeric value must fail the render, not startup
    scrape_interval: str = Field(
        "5",
        validation_alias=AliasChoices("SCRAPE_INTERVAL", "FLOW_MONITOR_SCRAPE_INTERVAL"),
    )

    # API server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "FLOW_MONITOR_"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"

    def engine_command(self) -> str:
        """Shell command used to start Prometheus against our config file."""
        return (
            f"prometheus "
            f"-config.file={self.config_path} "
            f"-storage.local.path={self.storage_path} "
            f"-web.console.libraries={self.console_libraries} "
            f"-web.console.templates={self.console_templates}"
        )


def get_settings() -> FlowMonitorSettings:
    """Build settings from the current environment (re-read on every call)."""
    return FlowMonitorSettings()
