from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .lib.env import DEFAULTS


@dataclass(frozen=True)
class ShellConfig:
    raw: Dict[str, Any]

    @property
    def simulate(self) -> bool:
        return bool(self.raw.get("simulate", False))

    @property
    def log_path(self) -> str:
        return str(((self.raw.get("logging") or {}).get("path")) or DEFAULTS.log_path)

    @property
    def log_level(self) -> int:
        name = str(((self.raw.get("logging") or {}).get("level")) or "INFO").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")
        return level

    @property
    def audit_log(self) -> Optional[str]:
        value = (self.raw.get("audit") or {}).get("path")
        return str(value) if value else None


def load_shell_config(path: Optional[str]) -> ShellConfig:
    """Load the YAML config file; ``None`` means all defaults."""

    if path is None:
        return ShellConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("safe-shell config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("safe-shell config must contain a mapping/object")

    return ShellConfig(raw=raw)
