"""Open saved files with the operating system's default application."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Protocol

logger = logging.getLogger(__name__)


class Viewer(Protocol):
    def open(self, path: str | Path) -> None:
        ...


class DefaultViewer:
    """Fire-and-forget launcher; errors are logged, never raised.

    Launchers run in their own session and are not waited on. Their handles
    are kept and reaped by `poll()` on the next `open` or `reap` call.
    """

    def __init__(self) -> None:
        self._launched: List[subprocess.Popen] = []

    def open(self, path: str | Path) -> None:
        target = str(path)
        self.reap()
        try:
            if os.name == "nt":
                os.startfile(target)  # type: ignore[attr-defined]
            else:
                command = "open" if sys.platform == "darwin" else "xdg-open"
                self._launched.append(
                    subprocess.Popen(
                        [command, target],
                        stdout=subprocess.DEVNULL,
                        stderr=subprocess.DEVNULL,
                        start_new_session=True,
                    )
                )
            logger.debug("Requested default viewer for %s", target)
        except OSError as exc:
            logger.warning("Failed to open %s: %s", target, exc)

    def reap(self) -> int:
        """Drop handles of launchers that have exited; return how many are left."""
        self._launched = [proc for proc in self._launched if proc.poll() is None]
        return len(self._launched)


_default_viewer = DefaultViewer()


def open_in_default_viewer(path: str | Path) -> None:
    _default_viewer.open(path)
