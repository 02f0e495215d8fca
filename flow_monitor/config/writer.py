from __future__ import annotations
from pathlib import Path
import logging
import os
import stat
import tempfile

from ..core.errors import ConfigWriteError

logger = logging.getLogger(__name__)


class ConfigWriter:
    """
    Writes the rendered configuration to the single prometheus.yml artifact.

    Every call replaces the whole file. Content goes to a temporary file in the
    same directory and is renamed into place, so a reload never sees a
    half-written config.
    """

    def __init__(self, config_path: str | Path) -> None:
        self.config_path = Path(config_path)

    def persist(self, content: str) -> Path:
        """
        Atomically overwrite the config file with content.

        Returns:
            Path of the written config file

        Raises:
            ConfigWriteError: the directory or file could not be written
        """
        tmp_path = None
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.config_path.parent,
                prefix=f".{self.config_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            # NamedTemporaryFile creates 0600; keep the mode Prometheus can read
            os.chmod(tmp_path, self._file_mode())
            os.replace(tmp_path, self.config_path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise ConfigWriteError(f"Failed to write {self.config_path}: {e}") from e

        logger.debug(f"Wrote {len(content)} bytes to {self.config_path}")
        return self.config_path

    def _file_mode(self) -> int:
        """Mode of the existing config file, or what a plain open() would create."""
        try:
            return stat.S_IMODE(self.config_path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def read(self) -> str:
        """Return the current config file content ("" if it was never written)."""
        if not self.config_path.exists():
            return ""
        return self.config_path.read_text(encoding="utf-8")
