"""Commands sent back to qutebrowser through the userscript FIFO."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Optional, Union

import click

from .exceptions import HostCommandError

logger = logging.getLogger(__name__)


class HostCommands:
    """Speaks qutebrowser's userscript command protocol.

    Every command is one line written to ``QUTE_FIFO``. Without a FIFO the
    userscript is running outside the browser, so files are opened with the
    system handler and messages only reach the log.
    """

    def __init__(self, fifo: Optional[Union[str, Path]] = None):
        self.fifo = Path(fifo) if fifo else None

    @property
    def attached(self) -> bool:
        return self.fifo is not None

    def send(self, command: str) -> None:
        if self.fifo is None:
            raise HostCommandError(f"No QUTE_FIFO to send {command.split()[0]!r} to")
        logger.debug("-> %s", command)
        try:
            # The FIFO is opened in append mode so a regular file works too.
            with open(self.fifo, "a", encoding="utf-8") as fifo:
                fifo.write(command + "\n")
        except OSError as e:
            raise HostCommandError(f"Failed to write to {self.fifo}: {e}") from e

    def open_tab(self, path: Union[str, Path]) -> None:
        """Open ``path`` in a new tab next to the current one."""
        path = Path(path)
        if not self.attached:
            logger.info("Opening %s with the system handler", path)
            click.launch(str(path))
            return
        self.send(f"open -t -r {shlex.quote(str(path))}")

    def message_error(self, text: str) -> None:
        if not self.attached:
            logger.error("%s", text)
            return
        self.send(f"message-error {shlex.quote(text)}")

    def message_info(self, text: str) -> None:
        if not self.attached:
            logger.info("%s", text)
            return
        self.send(f"message-info {shlex.quote(text)}")
