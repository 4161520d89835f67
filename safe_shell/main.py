from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .audit import AuditLogger
from .config import load_shell_config
from .interpreter import Interpreter
from .logging_utils import configure_logging
from .outcome import ScriptResult

logger = logging.getLogger(__name__)


def run(
    script: str,
    *,
    config_path: Optional[str] = None,
    log_path: Optional[str] = None,
    audit_log: Optional[str] = None,
    simulate: bool = False,
    verbose: bool = False,
) -> ScriptResult:
    """Run one script file (``-`` for stdin) with logging configured."""

    cfg = load_shell_config(config_path)
    configure_logging(cfg, log_path=log_path, verbose=verbose)

    audit_path = audit_log or cfg.audit_log
    interpreter = Interpreter(
        simulate=simulate or cfg.simulate,
        audit=AuditLogger.at(audit_path) if audit_path else None,
    )

    if script == "-":
        return interpreter.execute(sys.stdin.read())
    return interpreter.execute_file(script)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="safe-shell", description="Run a #!safe_shell script")
    p.add_argument("script", help="Script path, or - to read from stdin")
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--log", default=None, help="Log file path (default: /var/log/safe-shell.log)")
    p.add_argument("--audit-log", default=None, help="Append a JSON line per command to this file")
    p.add_argument("--simulate", action="store_true", help="Validate and log commands without running them")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        result = run(
            args.script,
            config_path=args.config,
            log_path=args.log,
            audit_log=args.audit_log,
            simulate=args.simulate,
            verbose=args.verbose,
        )
    except KeyboardInterrupt:
        return 130

    if not result.success:
        print(result.error_message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
