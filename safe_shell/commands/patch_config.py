from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from ..lib.documents import DocumentError
from ..outcome import Outcome
from ..registry import ExecutionContext

logger = logging.getLogger(__name__)

USAGE = "patch_config format is 'patch_config <file> set <key> <value>'"

_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")

Scalar = Union[int, float, bool, str]

# Same as the default int/str conversion limit of current interpreters.
MAX_INT_DIGITS = 4300


def coerce_value(text: str) -> Scalar:
    """int, then float, then true/false, otherwise the text unchanged.

    Numbers that cannot be represented (too many digits for int(), or a
    float that overflows to infinity) stay as text.
    """

    if _INT.fullmatch(text):
        if len(text.lstrip("+-")) > MAX_INT_DIGITS:
            return text
        try:
            return int(text)
        except ValueError:
            return text
    if _FLOAT.fullmatch(text):
        number = float(text)
        return number if math.isfinite(number) else text
    if text == "true":
        return True
    if text == "false":
        return False
    return text


def split_key(key: str) -> Optional[List[str]]:
    parts = key.split(".")
    if any(not p for p in parts):
        return None
    return parts


def set_dotted(data: Dict[str, Any], parts: Sequence[str], value: Any) -> Optional[str]:
    """Assign ``value`` at ``parts`` inside ``data``, creating missing mappings.

    Returns the segment that blocked the walk, if any.
    """

    node = data
    for part in parts[:-1]:
        child = node.get(part)
        if child is None:
            child = {}
            node[part] = child
        elif not isinstance(child, dict):
            return part
        node = child
    node[parts[-1]] = value
    return None


class PatchConfigCommand:
    name = "patch_config"

    def validate(self, args: Sequence[str]) -> Optional[str]:
        if len(args) != 4 or args[1] != "set":
            return f"{USAGE}, got {' '.join(args) or 'no arguments'}."
        if split_key(args[2]) is None:
            return f"Invalid key '{args[2]}'."
        return None

    def execute(self, args: Sequence[str], ctx: ExecutionContext) -> Outcome:
        file_path, _, key, raw_value = args
        parts = split_key(key) or [key]
        value = coerce_value(raw_value)

        try:
            data = ctx.system.load_document(file_path)
        except OSError as e:
            return Outcome.failure(f"Cannot open config file '{file_path}': {e.strerror or e}")
        except DocumentError as e:
            return Outcome.failure(f"Failed to parse config file '{file_path}': {e}")

        blocked = set_dotted(data, parts, value)
        if blocked is not None:
            return Outcome.failure(f"Cannot set '{key}' in '{file_path}': '{blocked}' is not an object.")

        if ctx.simulate:
            logger.info("Would set %s=%r in %s", key, value, file_path)
            return Outcome.success()

        try:
            ctx.system.save_document(file_path, data)
        except OSError as e:
            return Outcome.failure(f"Cannot write config file '{file_path}': {e.strerror or e}")
        except DocumentError as e:
            return Outcome.failure(f"Cannot write config file '{file_path}': {e}")

        logger.info("Set %s=%r in %s", key, value, file_path)
        return Outcome.success()
