"""flow-monitor: dynamic scrape/alert registry for Prometheus."""

__version__ = "1.0.0"
