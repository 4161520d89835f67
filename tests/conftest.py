from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

import pytest

from safe_shell.interpreter import Interpreter
from safe_shell.lib.system import SystemServices


class FakeSystem(SystemServices):
    """Real file removal, copy and document I/O; fake ownership and processes."""

    def __init__(self) -> None:
        self.calls: List[Tuple] = []
        self.users: Dict[str, int] = {"root": 0, "svc": 1001}
        self.groups: Dict[str, int] = {"root": 0, "svc": 1001}
        self.processes: Set[str] = set()
        self.failures: Dict[str, OSError] = {}

    def _maybe_fail(self, op: str) -> None:
        if op in self.failures:
            raise self.failures[op]

    def make_dirs(self, path: str) -> None:
        self._maybe_fail("make_dirs")
        self.calls.append(("make_dirs", path))

    def chmod(self, path: str, mode: int) -> None:
        self._maybe_fail("chmod")
        self.calls.append(("chmod", path, mode))

    def chown(self, path: str, uid: int, gid: int) -> None:
        self._maybe_fail("chown")
        self.calls.append(("chown", path, uid, gid))

    def lookup_user(self, name: str) -> Optional[int]:
        return self.users.get(name)

    def lookup_group(self, name: str) -> Optional[int]:
        return self.groups.get(name)

    def signal_processes(self, name: str, signal_name: str) -> bool:
        self._maybe_fail("signal_processes")
        self.calls.append(("signal", name, signal_name))
        return name in self.processes


@pytest.fixture
def system() -> FakeSystem:
    return FakeSystem()


@pytest.fixture
def interpreter(system: FakeSystem) -> Interpreter:
    return Interpreter(system=system, environ={"HOME_DIR": "/home/svc"})
