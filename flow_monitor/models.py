"""
Registry entities.

Default-constructed instances are the "absent" values echoed back when a
registration carries no target or no alert.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ScrapeTarget:
    """A service Prometheus discovers through DNS (tasks.<name>) and scrapes."""

    name: str = ""
    port: int = 0


@dataclass(frozen=True)
class AlertRule:
    """A named alert condition; an empty source means it was not specified."""

    name: str = ""
    condition: str = ""
    source: str = ""


@dataclass(frozen=True)
class ReloadResult:
    """Outcome of one reload request; status_code is 0 if no response arrived."""

    ok: bool
    status_code: int = 0
    error: str | None = None
