"""Variable store and ``${NAME}`` placeholder expansion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional

IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_OPEN = "${"
_CLOSE = "}"


def is_identifier(name: str) -> bool:
    return IDENTIFIER.fullmatch(name) is not None


class VariableStore(Mapping[str, str]):
    """Script-local variables. One instance per script run."""

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        if not is_identifier(name):
            raise ValueError(f"Invalid variable name: {name!r}")
        self._values[name] = value

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


@dataclass(frozen=True)
class Substitution:
    value: Optional[str] = None
    missing: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.missing is None


class Substitutor:
    """Resolve placeholders against the variable store, then the environment."""

    def __init__(self, variables: Mapping[str, str], environ: Mapping[str, str]) -> None:
        self.variables = variables
        self.environ = environ

    def lookup(self, name: str) -> Optional[str]:
        if name in self.variables:
            return self.variables[name]
        return self.environ.get(name)

    def substitute(self, raw: str) -> Substitution:
        """Expand every ``${NAME}`` in ``raw`` in a single left-to-right pass.

        Replacement text is not scanned again. ``${}`` and an unterminated
        ``${`` are kept as literal text.
        """

        out: list[str] = []
        pos = 0
        n = len(raw)

        while pos < n:
            start = raw.find(_OPEN, pos)
            if start == -1:
                break
            name_start = start + len(_OPEN)
            end = raw.find(_CLOSE, name_start)
            if end == -1:
                break
            if end == name_start:
                # "${}" has no name; keep it and continue after it.
                out.append(raw[pos : end + 1])
                pos = end + 1
                continue

            name = raw[name_start:end]
            value = self.lookup(name)
            if value is None:
                return Substitution(missing=name)

            out.append(raw[pos:start])
            out.append(value)
            pos = end + 1

        out.append(raw[pos:])
        return Substitution(value="".join(out))
