"""
Error types raised by the rendering, writing and engine-launch layers.

Reload failures are not exceptions: the reload path returns a ReloadResult
so the registration handler can echo the engine's status code.
"""


class FormatError(ValueError):
    """The configured scrape interval is not an integer."""


class ConfigWriteError(OSError):
    """The Prometheus config file could not be written."""


class EngineLaunchError(RuntimeError):
    """The Prometheus process could not be started or exited with an error."""
