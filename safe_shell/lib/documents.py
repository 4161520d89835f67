from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


class DocumentError(ValueError):
    """A structured document could not be parsed or has the wrong shape."""


def detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"yaml", "yml"}:
        return "yaml"
    # Everything else is treated as JSON.
    return "json"


def load_document(path: str) -> Dict[str, Any]:
    """Read a JSON or YAML mapping from ``path``.

    OSError from reading propagates unchanged; undecodable bytes, syntax errors
    and non-mapping roots raise DocumentError.
    """

    p = Path(path)
    raw = p.read_bytes()
    fmt = detect_format(p)

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentError(f"not valid UTF-8: {e}") from e

    try:
        if fmt == "yaml":
            data = yaml.safe_load(text)
            if data is None:
                data = {}
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentError(str(e)) from e

    if not isinstance(data, dict):
        raise DocumentError(f"document root must be an object/mapping, got {type(data).__name__}")

    return data


def save_document(path: str, data: Dict[str, Any]) -> None:
    """Write ``data`` back pretty-printed. NaN and infinity are refused for JSON."""

    p = Path(path)
    if detect_format(p) == "yaml":
        p.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    else:
        try:
            text = json.dumps(data, indent=4, ensure_ascii=False, allow_nan=False)
        except ValueError as e:
            raise DocumentError(str(e)) from e
        p.write_text(text + "\n", encoding="utf-8")
    logger.debug("Wrote %s document %s", detect_format(p), path)
