from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..lib.system import SystemServices
from ..outcome import Outcome
from ..registry import ExecutionContext, check_arity

logger = logging.getLogger(__name__)

_OCTAL_DIGITS = frozenset("01234567")
_MAX_MODE = 0o7777


@dataclass(frozen=True)
class DirectoryPlan:
    path: str
    mode: int
    owner: str
    group: str
    uid: int
    gid: int


def parse_mode(text: str) -> Optional[int]:
    if not text or not set(text) <= _OCTAL_DIGITS:
        return None
    mode = int(text, 8)
    if mode > _MAX_MODE:
        return None
    return mode


class MakeDirCommand:
    """makedir <path> <owner:group> <permissions>

    Everything is checked up front; the effect then runs directory creation,
    chmod, chown in that order. A later failure leaves earlier changes in place.
    """

    name = "makedir"

    def _check_shape(self, args: Sequence[str]) -> Tuple[Optional[str], int, str, str]:
        problem = check_arity(self.name, args, exactly=3, usage="path, owner:group, permissions")
        if problem:
            return problem, 0, "", ""

        _, owner_group, perms = args
        mode = parse_mode(perms)
        if mode is None:
            return f"Invalid permissions format: {perms}", 0, "", ""

        if ":" not in owner_group:
            return "Invalid owner:group format. Expected 'user:group'.", 0, "", ""
        owner, group = owner_group.split(":", 1)
        return None, mode, owner, group

    def validate(self, args: Sequence[str]) -> Optional[str]:
        problem, _, _, _ = self._check_shape(args)
        return problem

    def resolve(self, args: Sequence[str], system: SystemServices) -> Tuple[Optional[DirectoryPlan], Optional[str]]:
        problem, mode, owner, group = self._check_shape(args)
        if problem:
            return None, problem

        uid = system.lookup_user(owner)
        if uid is None:
            return None, f"User '{owner}' not found."
        gid = system.lookup_group(group)
        if gid is None:
            return None, f"Group '{group}' not found."

        return DirectoryPlan(path=args[0], mode=mode, owner=owner, group=group, uid=uid, gid=gid), None

    def execute(self, args: Sequence[str], ctx: ExecutionContext) -> Outcome:
        plan, problem = self.resolve(args, ctx.system)
        if plan is None:
            return Outcome.failure(problem or "Invalid makedir arguments.")

        if ctx.simulate:
            logger.info(
                "Would create %s mode=%04o owner=%s:%s", plan.path, plan.mode, plan.owner, plan.group
            )
            return Outcome.success()

        try:
            ctx.system.make_dirs(plan.path)
        except OSError as e:
            return Outcome.failure(f"Failed to create directory '{plan.path}': {e.strerror or e}")

        try:
            ctx.system.chmod(plan.path, plan.mode)
        except OSError as e:
            return Outcome.failure(f"Failed to set permissions for '{plan.path}': {e.strerror or e}")

        try:
            ctx.system.chown(plan.path, plan.uid, plan.gid)
        except OSError as e:
            return Outcome.failure(f"Failed to set owner for '{plan.path}': {e.strerror or e}")

        logger.info("Created %s mode=%04o owner=%s:%s", plan.path, plan.mode, plan.owner, plan.group)
        return Outcome.success()
