from __future__ import annotations

import logging
import signal
import string
from typing import Optional, Sequence

from ..lib.command import CommandFailed
from ..outcome import Outcome
from ..registry import ExecutionContext, check_arity

logger = logging.getLogger(__name__)

# Only these characters may reach the process table lookup.
NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
SIGNAL_CHARS = frozenset(string.ascii_letters)


def normalize_signal(text: str) -> Optional[str]:
    """Map TERM / sigterm / SIGTERM to the bare name pkill expects."""

    upper = text.upper()
    bare = upper[3:] if upper.startswith("SIG") else upper
    if f"SIG{bare}" not in signal.Signals.__members__:
        return None
    return bare


class SignalProcessCommand:
    name = "signal_process"

    def validate(self, args: Sequence[str]) -> Optional[str]:
        problem = check_arity(self.name, args, exactly=2, usage="process_name, signal")
        if problem:
            return problem

        process_name, sig = args
        if not process_name or not set(process_name) <= NAME_CHARS:
            return "Invalid characters in signal_process arguments."
        if not sig or not set(sig) <= SIGNAL_CHARS:
            return "Invalid characters in signal_process arguments."
        if normalize_signal(sig) is None:
            return f"Unknown signal '{sig}'."
        return None

    def execute(self, args: Sequence[str], ctx: ExecutionContext) -> Outcome:
        process_name = args[0]
        sig = normalize_signal(args[1]) or args[1]

        if ctx.simulate:
            logger.info("Would send SIG%s to %s", sig, process_name)
            return Outcome.success()

        try:
            matched = ctx.system.signal_processes(process_name, sig)
        except (CommandFailed, OSError) as e:
            return Outcome.failure(f"Failed to signal '{process_name}': {e}")

        if matched:
            logger.info("Sent SIG%s to %s", sig, process_name)
        else:
            logger.info("No process matched %s (SIG%s not sent)", process_name, sig)
        return Outcome.success()
