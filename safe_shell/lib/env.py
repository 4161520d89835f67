from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Defaults:
    header: str = "#!safe_shell"
    log_path: str = "/var/log/safe-shell.log"
    fallback_log_name: str = "safe-shell.log"


DEFAULTS = Defaults()
