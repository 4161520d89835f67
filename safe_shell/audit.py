from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence


def command_event(
    *,
    name: str,
    line: int,
    args: Sequence[str],
    ok: bool,
    simulate: bool = False,
    error: Optional[str] = None,
) -> Dict[str, Any]:
    e: Dict[str, Any] = {
        "action": name,
        "ok": ok,
        "details": {"line": line, "args": list(args), "simulate": simulate},
    }
    if error:
        e["error"] = error
    return e


@dataclass(frozen=True)
class AuditLogger:
    """Append-only JSON-lines trail, one object per dispatched command."""

    path: Path

    @classmethod
    def at(cls, path: str | Path) -> "AuditLogger":
        return cls(path=Path(path).expanduser())

    def log(self, event: Dict[str, Any]) -> None:
        event = dict(event)
        event.setdefault("ts", time.time())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(event, sort_keys=True) + "\n")
