from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .script import Command


@dataclass(frozen=True)
class Outcome:
    """Result of validating or running one command."""

    ok: bool
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> "Outcome":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "Outcome":
        return cls(ok=False, reason=reason)


@dataclass(frozen=True)
class ParseResult:
    commands: Tuple["Command", ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ScriptResult:
    success: bool
    error_message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


def line_error(line_number: int, cause: str) -> str:
    return f"Error at line {line_number}: {cause}"
