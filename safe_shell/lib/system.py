from __future__ import annotations

import grp
import logging
import os
import pwd
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from .command import run_cmd
from .documents import load_document, save_document

logger = logging.getLogger(__name__)

# pkill: 0 = at least one process signalled, 1 = nothing matched.
PKILL_NO_MATCH = 1


class SystemServices:
    """Host OS primitives used by the command handlers.

    Methods raise the usual exceptions (OSError, DocumentError, CommandFailed);
    turning those into script outcomes is the caller's job. Tests swap this
    object for a fake with the same methods.
    """

    def remove_tree(self, path: str) -> bool:
        """Remove ``path`` recursively. Returns False if it did not exist."""

        p = Path(path)
        if not p.exists() and not p.is_symlink():
            return False
        if p.is_dir() and not p.is_symlink():
            shutil.rmtree(p)
        else:
            p.unlink()
        return True

    def make_dirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(path, mode)

    def chown(self, path: str, uid: int, gid: int) -> None:
        os.chown(path, uid, gid)

    def lookup_user(self, name: str) -> Optional[int]:
        try:
            return pwd.getpwnam(name).pw_uid
        except KeyError:
            return None

    def lookup_group(self, name: str) -> Optional[int]:
        try:
            return grp.getgrnam(name).gr_gid
        except KeyError:
            return None

    def signal_processes(self, name: str, signal_name: str) -> bool:
        """Send ``signal_name`` to every process matching ``name``.

        Returns False when no process matched.
        """

        res = run_cmd(["pkill", f"-{signal_name}", name], accept=(0, PKILL_NO_MATCH))
        return res.returncode == 0

    def copy_file(self, src: str, dst: str) -> None:
        shutil.copyfile(src, dst)

    def load_document(self, path: str) -> Dict[str, Any]:
        return load_document(path)

    def save_document(self, path: str, data: Dict[str, Any]) -> None:
        save_document(path, data)
