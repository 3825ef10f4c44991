"""Hand a path to the operating system's default application.

Opening is fire-and-forget: the launcher's job ends at the handoff, so the
result is never awaited and failures are only logged.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


def open_command(path: Path, platform: str | None = None) -> list[str]:
    """Return the opener command line for ``path`` on POSIX platforms."""
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]


def open_with_default_application(path: Path) -> None:
    """Launch the default handler for ``path``; raises ``OSError`` on failure."""
    if os.name == "nt":
        os.startfile(str(path))  # type: ignore[attr-defined]
        return
    subprocess.Popen(
        open_command(path),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


def _open_worker(path: Path) -> None:
    try:
        open_with_default_application(path)
    except Exception as exc:
        logger.debug("open %s failed: %s", path, exc)


def dispatch_open(path: Path) -> threading.Thread:
    """Start opening ``path`` on a daemon thread and return that thread."""
    logger.info("opening %s", path)
    worker = threading.Thread(
        target=_open_worker,
        args=(path,),
        name="quickopen-open",
        daemon=True,
    )
    worker.start()
    return worker


__all__ = ["dispatch_open", "open_command", "open_with_default_application"]
