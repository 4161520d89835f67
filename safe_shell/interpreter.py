from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from .audit import AuditLogger, command_event
from .commands import (
    CopyCommand,
    MakeDirCommand,
    PatchConfigCommand,
    RemoveCommand,
    SignalProcessCommand,
    config_manager_command,
    partition_control_command,
    reboot_command,
)
from .lib.system import SystemServices
from .outcome import ParseResult, ScriptResult, line_error
from .registry import CommandRegistry, ExecutionContext, Handler
from .script import Command, ScriptParser
from .substitution import VariableStore

logger = logging.getLogger(__name__)


def build_handlers() -> List[Handler]:
    return [
        RemoveCommand(),
        MakeDirCommand(),
        SignalProcessCommand(),
        PatchConfigCommand(),
        CopyCommand(),
        config_manager_command(),
        reboot_command(),
        partition_control_command(),
    ]


class Interpreter:
    """Parse a whole script, then run its commands in order.

    Nothing runs if parsing fails. Execution stops at the first failing
    command; effects of earlier commands stay in place. Variables live only
    for the duration of one execute() call, so an instance may be shared.
    """

    def __init__(
        self,
        *,
        system: Optional[SystemServices] = None,
        simulate: bool = False,
        environ: Optional[Mapping[str, str]] = None,
        audit: Optional[AuditLogger] = None,
        handlers: Optional[Iterable[Handler]] = None,
    ) -> None:
        self.registry = CommandRegistry(build_handlers() if handlers is None else handlers)
        self.context = ExecutionContext(system=system or SystemServices(), simulate=simulate)
        self.environ = os.environ if environ is None else environ
        self.audit = audit

    @property
    def simulate(self) -> bool:
        return self.context.simulate

    def parse(self, script_text: str, variables: Optional[VariableStore] = None) -> ParseResult:
        parser = ScriptParser(self.registry, variables if variables is not None else VariableStore(), self.environ)
        return parser.parse(script_text)

    def run_commands(self, commands: Sequence[Command]) -> ScriptResult:
        for cmd in commands:
            logger.info("line %d: %s %s", cmd.line_number, cmd.name, " ".join(cmd.arguments))
            outcome = self.registry.dispatch(cmd.name, cmd.arguments, self.context)
            audit_problem = self._record(cmd, outcome.ok, outcome.reason)
            if not outcome.ok or audit_problem:
                message = line_error(cmd.line_number, outcome.reason or audit_problem or "Command failed.")
                logger.error("%s", message)
                return ScriptResult(success=False, error_message=message)
        return ScriptResult(success=True)

    def execute(self, script_text: str) -> ScriptResult:
        variables = VariableStore()
        parsed = self.parse(script_text, variables)
        if not parsed.ok:
            logger.error("%s", parsed.error)
            return ScriptResult(success=False, error_message=parsed.error)

        logger.info("Executing %d command(s)%s", len(parsed.commands), " (simulate)" if self.simulate else "")
        return self.run_commands(parsed.commands)

    def execute_file(self, path: str) -> ScriptResult:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = getattr(e, "strerror", None) or str(e)
            return ScriptResult(success=False, error_message=f"Error: Failed to open script '{path}': {reason}")
        return self.execute(text)

    def _record(self, cmd: Command, ok: bool, error: Optional[str]) -> Optional[str]:
        """Write the audit event; returns a failure reason if that was impossible."""

        if self.audit is None:
            return None
        try:
            self.audit.log(
                command_event(
                    name=cmd.name,
                    line=cmd.line_number,
                    args=cmd.arguments,
                    ok=ok,
                    simulate=self.simulate,
                    error=error,
                )
            )
        except OSError as e:
            return f"Failed to write audit log '{self.audit.path}': {e.strerror or e}"
        return None
