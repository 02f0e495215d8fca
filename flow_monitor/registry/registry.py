from __future__ import annotations
from typing import Dict, List, Optional
import re
import logging

from ..models import AlertRule, ScrapeTarget

logger = logging.getLogger(__name__)

_RULE_NAME_STRIP = re.compile(r"[^a-z0-9-]")


def normalize_rule_name(name: str) -> str:
    """Lowercase and drop every character outside [a-z0-9-]."""
    return _RULE_NAME_STRIP.sub("", name.lower())


class Registry:
    """
    In-memory store of scrape targets and alert rules.

    Lives for the whole process; nothing is persisted or restored. Re-registering
    a name replaces the previous entry entirely. Callers that mutate and render
    concurrently must serialize access themselves (MonitoringService holds the lock).
    """

    def __init__(self) -> None:
        self._targets: Dict[str, ScrapeTarget] = {}
        self._rules: Dict[str, AlertRule] = {}

    # ---- mutations ----
    def upsert_target(self, name: str, port: int) -> Optional[ScrapeTarget]:
        if not name:
            logger.debug("Ignoring scrape target registration without a name")
            return None
        target = ScrapeTarget(name=name, port=port)
        self._targets[name] = target
        return target

    def upsert_rule(self, name: str, condition: str, source: str = "") -> Optional[AlertRule]:
        key = normalize_rule_name(name)
        if not key:
            logger.debug(f"Ignoring alert registration, name {name!r} is empty after normalization")
            return None
        rule = AlertRule(name=key, condition=condition, source=source)
        self._rules[key] = rule
        return rule

    # ---- read model for renderer ----
    def list_targets(self) -> List[ScrapeTarget]:
        """Snapshot of all targets ordered by name."""
        return [self._targets[k] for k in sorted(self._targets)]

    def list_rules(self) -> List[AlertRule]:
        """Snapshot of all alert rules ordered by name."""
        return [self._rules[k] for k in sorted(self._rules)]

    def get_target(self, name: str) -> Optional[ScrapeTarget]:
        return self._targets.get(name)

    def get_rule(self, name: str) -> Optional[AlertRule]:
        return self._rules.get(normalize_rule_name(name))

    @property
    def target_count(self) -> int:
        return len(self._targets)

    @property
    def rule_count(self) -> int:
        return len(self._rules)
