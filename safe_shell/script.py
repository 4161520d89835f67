"""Script parsing.

A script is line oriented:

    #!safe_shell            <- mandatory header, exactly this text
    # comment               <- ignored, as are blank lines
    NAME=value              <- assignment, no spaces around '='
    command arg ${NAME}     <- command invocation

Lines that start with a space or tab are ignored. Parsing finishes before
anything runs, so a script with a bad line executes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Container, List, Mapping, Optional, Tuple

from .lib.env import DEFAULTS
from .outcome import ParseResult, line_error
from .substitution import Substitutor, VariableStore, is_identifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    line_number: int
    name: str
    arguments: Tuple[str, ...] = ()


class LineKind(Enum):
    SKIP = "skip"
    ASSIGNMENT = "assignment"
    COMMAND = "command"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    name: str = ""
    value: str = ""
    arguments: Tuple[str, ...] = ()


_SKIPPED = ClassifiedLine(kind=LineKind.SKIP)


def _split_assignment(line: str) -> Optional[Tuple[str, str]]:
    eq = line.find("=")
    if eq <= 0:
        return None
    if line[eq - 1] == " ":
        return None
    if eq + 1 < len(line) and line[eq + 1] == " ":
        return None
    name = line[:eq]
    if not is_identifier(name):
        return None
    return name, line[eq + 1 :]


def classify_line(line: str) -> ClassifiedLine:
    """Classify one body line (never the header)."""

    if line[:1] in {" ", "\t"}:
        return _SKIPPED
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return _SKIPPED

    assignment = _split_assignment(line.rstrip())
    if assignment is not None:
        name, value = assignment
        return ClassifiedLine(kind=LineKind.ASSIGNMENT, name=name, value=value)

    tokens = stripped.split()
    return ClassifiedLine(kind=LineKind.COMMAND, name=tokens[0], arguments=tuple(tokens[1:]))


class ScriptParser:
    """Turn script text into commands with every placeholder resolved.

    ``known_commands`` is consulted so an unknown command name fails the
    parse rather than surfacing half way through execution.
    """

    def __init__(
        self,
        known_commands: Container[str],
        variables: VariableStore,
        environ: Mapping[str, str],
        *,
        header: str = DEFAULTS.header,
    ) -> None:
        self.known_commands = known_commands
        self.variables = variables
        self.substitutor = Substitutor(variables, environ)
        self.header = header

    def parse(self, text: str) -> ParseResult:
        if not text:
            return ParseResult(error=line_error(1, "Script is empty."))
        lines = text.split("\n")
        if lines[0].rstrip("\r") != self.header:
            return ParseResult(
                error=line_error(1, f"Missing or incorrect header. Expected '{self.header}'.")
            )

        commands: List[Command] = []
        for line_number, raw in enumerate(lines[1:], start=2):
            parsed = classify_line(raw.rstrip("\r"))

            if parsed.kind is LineKind.SKIP:
                continue

            if parsed.kind is LineKind.ASSIGNMENT:
                self.variables.set(parsed.name, parsed.value)
                logger.debug("line %d: %s=%s", line_number, parsed.name, parsed.value)
                continue

            if parsed.name not in self.known_commands:
                return ParseResult(error=line_error(line_number, f"Unknown command '{parsed.name}'."))

            resolved: List[str] = []
            for raw_arg in parsed.arguments:
                sub = self.substitutor.substitute(raw_arg)
                if not sub.ok:
                    return ParseResult(
                        error=line_error(line_number, f"Variable '{sub.missing}' not found.")
                    )
                resolved.append(sub.value or "")

            commands.append(Command(line_number=line_number, name=parsed.name, arguments=tuple(resolved)))

        logger.debug("Parsed %d command(s)", len(commands))
        return ParseResult(commands=tuple(commands))
