from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Collection, Sequence

logger = logging.getLogger(__name__)


class CommandFailed(RuntimeError):
    def __init__(self, result: "CmdResult") -> None:
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        super().__init__(f"{fmt_argv(result.argv)} failed: {detail}")
        self.result = result


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    accept: Collection[int] = (0,),
) -> CmdResult:
    """Run an external program from an argv list.

    There is no shell in between, so arguments are never re-split or expanded.
    Exit statuses outside ``accept`` raise CommandFailed.
    """

    argv_list = list(argv)
    logger.info("CMD %s", fmt_argv(argv_list))

    p = subprocess.run(
        argv_list,
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)
    if p.returncode not in accept:
        raise CommandFailed(result)
    return result
