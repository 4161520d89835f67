from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Protocol, Sequence

from .lib.system import SystemServices
from .outcome import Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionContext:
    system: SystemServices
    simulate: bool = False


class Handler(Protocol):
    """Validation plus effect for one command name."""

    name: str

    def validate(self, args: Sequence[str]) -> Optional[str]:
        ...

    def execute(self, args: Sequence[str], ctx: ExecutionContext) -> Outcome:
        ...


def check_arity(
    name: str,
    args: Sequence[str],
    *,
    exactly: Optional[int] = None,
    at_least: Optional[int] = None,
    usage: str = "",
) -> Optional[str]:
    """Return an error message when ``args`` has the wrong length."""

    got = len(args)
    hint = f" ({usage})" if usage else ""
    if exactly is not None and got != exactly:
        noun = "argument" if exactly == 1 else "arguments"
        return f"{name} expects {exactly} {noun}{hint}, got {got}."
    if at_least is not None and got < at_least:
        noun = "argument" if at_least == 1 else "arguments"
        return f"{name} expects at least {at_least} {noun}{hint}, got {got}."
    return None


class CommandRegistry:
    """Read-only name -> handler table, built once per interpreter."""

    def __init__(self, handlers: Iterable[Handler]) -> None:
        table = {}
        for h in handlers:
            if h.name in table:
                raise ValueError(f"Duplicate command handler: {h.name}")
            table[h.name] = h
        self._handlers: Mapping[str, Handler] = MappingProxyType(table)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def dispatch(self, name: str, args: Sequence[str], ctx: ExecutionContext) -> Outcome:
        handler = self._handlers.get(name)
        if handler is None:
            return Outcome.failure(f"Unknown command '{name}'.")

        problem = handler.validate(args)
        if problem is not None:
            logger.info("Rejected %s: %s", name, problem)
            return Outcome.failure(problem)

        return handler.execute(args, ctx)
