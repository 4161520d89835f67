from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..outcome import Outcome
from ..registry import ExecutionContext, check_arity

logger = logging.getLogger(__name__)


class RemoveCommand:
    name = "remove"

    def validate(self, args: Sequence[str]) -> Optional[str]:
        return check_arity(self.name, args, exactly=1, usage="path")

    def execute(self, args: Sequence[str], ctx: ExecutionContext) -> Outcome:
        path = args[0]
        if ctx.simulate:
            logger.info("Would remove %s", path)
            return Outcome.success()

        try:
            existed = ctx.system.remove_tree(path)
        except OSError as e:
            return Outcome.failure(f"Failed to remove '{path}': {e.strerror or e}")

        if existed:
            logger.info("Removed %s", path)
        else:
            logger.info("Nothing to remove at %s", path)
        return Outcome.success()
