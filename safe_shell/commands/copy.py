from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..outcome import Outcome
from ..registry import ExecutionContext, check_arity

logger = logging.getLogger(__name__)


class CopyCommand:
    name = "copy"

    def validate(self, args: Sequence[str]) -> Optional[str]:
        return check_arity(self.name, args, exactly=2, usage="source, destination")

    def execute(self, args: Sequence[str], ctx: ExecutionContext) -> Outcome:
        src, dst = args
        if ctx.simulate:
            logger.info("Would copy %s -> %s", src, dst)
            return Outcome.success()

        try:
            ctx.system.copy_file(src, dst)
        except OSError as e:
            return Outcome.failure(f"Failed to copy '{src}' to '{dst}': {e.strerror or e}")

        logger.info("Copied %s -> %s", src, dst)
        return Outcome.success()
