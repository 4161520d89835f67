"""Commands with no real backing system yet.

They check their arguments and log the request; nothing else happens.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..outcome import Outcome
from ..registry import ExecutionContext, check_arity

logger = logging.getLogger(__name__)


class AcknowledgeCommand:
    def __init__(
        self,
        name: str,
        *,
        at_least: int = 0,
        at_most: Optional[int] = None,
        usage: str = "",
    ) -> None:
        self.name = name
        self.at_least = at_least
        self.at_most = at_most
        self.usage = usage

    def validate(self, args: Sequence[str]) -> Optional[str]:
        if self.at_most is not None and self.at_most == self.at_least:
            return check_arity(self.name, args, exactly=self.at_least, usage=self.usage)
        problem = check_arity(self.name, args, at_least=self.at_least, usage=self.usage)
        if problem:
            return problem
        if self.at_most is not None and len(args) > self.at_most:
            return f"{self.name} expects at most {self.at_most} arguments, got {len(args)}."
        return None

    def execute(self, args: Sequence[str], ctx: ExecutionContext) -> Outcome:
        prefix = "Would acknowledge" if ctx.simulate else "Acknowledged"
        logger.info("%s %s %s", prefix, self.name, " ".join(args))
        return Outcome.success()


def config_manager_command() -> AcknowledgeCommand:
    return AcknowledgeCommand("cfgmgr", at_least=2, usage="action, target, ...")


def reboot_command() -> AcknowledgeCommand:
    return AcknowledgeCommand("reboot", at_least=0, at_most=0)


def partition_control_command() -> AcknowledgeCommand:
    return AcknowledgeCommand("partctr", at_least=2, at_most=2, usage="partition, action")
