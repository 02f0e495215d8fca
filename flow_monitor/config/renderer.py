from __future__ import annotations
from typing import Iterable, List

from ..core.errors import FormatError
from ..core.parsing import parse_int
from ..models import AlertRule, ScrapeTarget


class ConfigRenderer:
    """
    Renders the Prometheus configuration (prometheus.yml) from registry snapshots.

    Output is a pure function of its inputs: the same targets, rules and scrape
    interval always produce byte-identical text. Writing the result to disk and
    hot-reloading Prometheus are handled by ConfigWriter and PrometheusManager.
    """

    separator = "\n"

    def render_global(self, scrape_interval: str | int) -> str:
        """
        Render the global block.

        Raises:
            FormatError: scrape_interval is not an integer number of seconds
        """
        try:
            seconds = parse_int(scrape_interval)
        except ValueError:
            raise FormatError(f"scrape interval must be an integer, got {scrape_interval!r}") from None
        return f"\nglobal:\n  scrape_interval: {seconds}s"

    def render_scrape_configs(self, targets: Iterable[ScrapeTarget]) -> str:
        """
        Render one scrape_configs stanza per target, ordered by name.

        Every stanza repeats the scrape_configs header and is discovered through
        DNS as tasks.<name>. Stanzas start and end with a newline, so plain
        concatenation leaves one blank line between them.
        """
        stanzas = []
        for target in sorted(targets, key=lambda t: t.name):
            stanzas.append(f"""
scrape_configs:
  - job_name: "{target.name}"
    dns_sd_configs:
      - names: ["tasks.{target.name}"]
        type: A
        port: {target.port}
""")
        return "".join(stanzas)

    def render_alerts(self, rules: Iterable[AlertRule]) -> str:
        """Render one ALERT stanza per rule, ordered by name; FROM only when set."""
        stanzas = []
        for rule in sorted(rules, key=lambda r: r.name):
            stanza = f"\nALERT {rule.name}\n  IF {rule.condition}\n"
            if rule.source:
                stanza += f"  FROM {rule.source}\n"
            stanzas.append(stanza)
        return "".join(stanzas)

    def render(
        self,
        targets: Iterable[ScrapeTarget],
        rules: Iterable[AlertRule],
        scrape_interval: str | int,
    ) -> str:
        """
        Render the full config: global, then scrape configs, then alerts.

        Blocks are separated by exactly one blank line; empty blocks are left
        out together with their separator. The result always ends with a newline.

        Raises:
            FormatError: propagated from render_global; nothing is rendered
        """
        blocks: List[str] = [self.render_global(scrape_interval)]
        scrape = self.render_scrape_configs(targets)
        if scrape:
            blocks.append(scrape)
        alerts = self.render_alerts(rules)
        if alerts:
            blocks.append(alerts)

        return self.separator.join(b.rstrip("\n") for b in blocks) + "\n"
