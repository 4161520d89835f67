"""safe-shell: a restricted script interpreter for privileged maintenance tasks.

Core design goals:
- Parse everything before running anything
- Fixed command vocabulary, no shell, no arbitrary programs
- ${NAME} templating from script variables and the environment
- Stop at the first failure and report the line
- Centralized logging
"""

from .interpreter import Interpreter
from .outcome import ScriptResult

__all__ = ["Interpreter", "ScriptResult"]
