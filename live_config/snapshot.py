from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from .values import ConfigValue, coerce, to_plain

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _yaml():
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "YAML snapshot requested but PyYAML is not available. "
            "Use a .json snapshot or install PyYAML."
        ) from e
    return yaml


def load_snapshot(path: str) -> Dict[str, ConfigValue]:
    """Read a JSON/YAML mapping of key -> string | list of strings | null.

    Null entries are dropped, so they count as undeclared when saved.
    """

    p = Path(path)
    text = p.read_text(encoding="utf-8")

    data: Any
    if _detect_format(p) in {"yaml", "yml"}:
        data = _yaml().safe_load(text) or {}
    else:
        data = json.loads(text)

    if not isinstance(data, dict):
        raise ValueError(f"Snapshot must be an object/dict, got {type(data)}")

    values: Dict[str, ConfigValue] = {}
    for key, raw in data.items():
        try:
            value = coerce(raw)
        except TypeError as e:
            raise ValueError(f"Snapshot {p}: bad value for {key}: {e}") from e
        if value is not None:
            values[str(key)] = value

    logger.debug("Read %d value(s) from snapshot %s", len(values), p)
    return values


def save_snapshot(path: str, values: Mapping[str, ConfigValue]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    plain = to_plain(values)
    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(_yaml().safe_dump(plain, sort_keys=True), encoding="utf-8")
    else:
        p.write_text(json.dumps(plain, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.info("Wrote %d value(s) to snapshot %s", len(plain), p)
