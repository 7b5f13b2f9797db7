"""Userscript environment handed over by qutebrowser."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import EnvironmentConfigError

logger = logging.getLogger(__name__)

MODE_COMMAND = "command"
MODE_HINTS = "hints"
MODES = (MODE_COMMAND, MODE_HINTS)

DEFAULT_DATA_DIR = Path("~/.local/share/qutebrowser").expanduser()
OUTPUT_FILENAME = "readability.html"


@dataclass
class UserscriptEnvironment:
    """Values qutebrowser exports to a spawned userscript."""

    url: str
    mode: str = MODE_COMMAND
    html_path: Optional[Path] = None
    data_dir: Path = DEFAULT_DATA_DIR
    config_dir: Optional[Path] = None
    fifo: Optional[Path] = None

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "UserscriptEnvironment":
        """Build the environment from ``QUTE_*`` variables.

        Raises:
            EnvironmentConfigError: a required variable is missing or the
                mode is not one the userscript understands.
        """
        env = os.environ if environ is None else environ

        url = (env.get("QUTE_URL") or "").strip()
        if not url:
            raise EnvironmentConfigError("QUTE_URL is not set; run this as a qutebrowser userscript")

        mode = (env.get("QUTE_MODE") or MODE_COMMAND).strip().lower()
        if mode not in MODES:
            raise EnvironmentConfigError(f"Unsupported QUTE_MODE {mode!r} (expected one of: {', '.join(MODES)})")

        html_path = _optional_path(env.get("QUTE_HTML"))
        if mode == MODE_COMMAND and html_path is None:
            raise EnvironmentConfigError("QUTE_HTML is not set; cannot read the current page")

        data_dir = _optional_path(env.get("QUTE_DATA_DIR")) or DEFAULT_DATA_DIR

        environment = cls(
            url=url,
            mode=mode,
            html_path=html_path,
            data_dir=data_dir,
            config_dir=_optional_path(env.get("QUTE_CONFIG_DIR")),
            fifo=_optional_path(env.get("QUTE_FIFO")),
        )
        logger.debug("Resolved userscript environment: %s", environment)
        return environment

    @property
    def fetches_url(self) -> bool:
        """Hint mode passes a link URL; the page has to be downloaded."""
        return self.mode == MODE_HINTS

    @property
    def output_path(self) -> Path:
        return self.data_dir / "userscripts" / OUTPUT_FILENAME


def _optional_path(value: Optional[str]) -> Optional[Path]:
    if not value or not value.strip():
        return None
    return Path(value.strip()).expanduser()
