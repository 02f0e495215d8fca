# flow_monitor/managers/engine_runner.py
from __future__ import annotations
from typing import Callable, List
import logging
import subprocess

from ..core.errors import EngineLaunchError

logger = logging.getLogger(__name__)


class PrometheusRunner:
    """
    Runs Prometheus in the foreground through /bin/sh.

    The runner callable defaults to subprocess.run and is injectable so tests
    can capture the command line without starting a process.
    """

    def __init__(self, command: str, runner: Callable[..., subprocess.CompletedProcess] = subprocess.run) -> None:
        self.command = command
        self.runner = runner

    @property
    def args(self) -> List[str]:
        return ["/bin/sh", "-c", self.command]

    def run(self) -> None:
        """
        Block until Prometheus exits.

        Raises:
            EngineLaunchError: the shell could not be started or Prometheus exited non-zero
        """
        logger.info(f"Starting Prometheus: {self.command}")
        try:
            res = self.runner(self.args, check=False)
        except OSError as e:
            raise EngineLaunchError(f"Could not execute the command: {self.command}: {e}") from e
        if res.returncode != 0:
            raise EngineLaunchError(
                f"Could not execute the command: {self.command} (exit code {res.returncode})"
            )
        logger.info("Prometheus exited")
