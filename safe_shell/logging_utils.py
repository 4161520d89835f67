from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import ShellConfig
from .lib.env import DEFAULTS

_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)

# Marks handlers installed here so a later call can replace them.
_OWNED = "_safe_shell_owned"


def _open_log_file(path: str) -> Optional[logging.Handler]:
    try:
        Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(path)
    except OSError:
        return None


def configure_logging(
    config: ShellConfig,
    *,
    log_path: Optional[str] = None,
    verbose: bool = False,
    also_console: bool = True,
) -> Optional[str]:
    """Point root logging at the file and level named by ``config``.

    ``log_path`` and ``verbose`` are command-line overrides. When the log
    file cannot be opened (typically /var/log without root) the handler
    falls back to ./safe-shell.log, and to console only if that fails too.

    Returns the file actually written, or None for console only.
    """

    requested = log_path or config.log_path
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else config.log_level)

    for h in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(h)
        h.close()

    chosen: Optional[str] = requested
    handlers: list[logging.Handler] = []
    file_handler = _open_log_file(requested)
    if file_handler is None:
        chosen = str(Path.cwd() / DEFAULTS.fallback_log_name)
        file_handler = _open_log_file(chosen)
    if file_handler is None:
        chosen = None
    else:
        handlers.append(file_handler)
    if also_console:
        handlers.append(logging.StreamHandler())

    for h in handlers:
        h.setFormatter(_FORMAT)
        setattr(h, _OWNED, True)
        root.addHandler(h)

    logging.getLogger(__name__).info("Logging initialized (requested=%s, actual=%s)", requested, chosen)
    return chosen
