from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .codec import (
    KEY_RE,
    check_writable,
    decode_value,
    encode_assignment,
    is_comment,
    split_assignment,
    unquote,
)
from .errors import ConfigurationMissing, ConfigurationNotFound, ConfigurationUnreadable
from .values import ConfigValue, coerce

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    path: str
    updated: List[str] = field(default_factory=list)
    appended: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    changed: bool = False


def _require_readable(path: Optional[str | os.PathLike]) -> Path:
    if not path:
        logger.error("No configuration file given")
        raise ConfigurationMissing("No configuration file given")

    p = Path(path)
    if not p.is_file():
        logger.error("Configuration file %s does not exist", p)
        raise ConfigurationNotFound(f"Configuration file {p} does not exist")
    if not os.access(p, os.R_OK):
        logger.error("Configuration file %s is not readable", p)
        raise ConfigurationUnreadable(f"Configuration file {p} is not readable")
    return p


def _read_lines(p: Path) -> List[str]:
    # Undecodable bytes (e.g. Latin-1 values) pass through untouched.
    return p.read_text(encoding="utf-8", errors="surrogateescape").replace("\r", "").split("\n")


def load(path: Optional[str | os.PathLike], keys: Iterable[str]) -> Dict[str, ConfigValue]:
    """Decode the requested keys from a config file.

    Only keys named in ``keys`` are returned (a single string is one key);
    an empty selection loads nothing. Keys that are absent or decode to an empty value are left out.
    When a key is assigned more than once the last line wins.
    """

    p = _require_readable(path)
    if isinstance(keys, str):
        keys = [keys]
    wanted = set(keys or ())
    if not wanted:
        return {}

    result: Dict[str, ConfigValue] = {}
    for line in _read_lines(p):
        parts = split_assignment(line)
        if parts is None:
            continue
        key, raw = parts
        if key not in wanted or not raw:
            continue

        value = decode_value(raw)
        if value.is_empty():
            result.pop(key, None)
        else:
            result[key] = value

    logger.debug("Loaded %s from %s", sorted(result), p)
    return result


def load_value(path: Optional[str | os.PathLike], key: str) -> str:
    """Return the unquoted text of ``key``, or "" if the file or key is missing."""

    if not path:
        return ""
    p = Path(path)
    if not p.is_file() or not os.access(p, os.R_OK):
        logger.debug("Configuration file %s not available, %s treated as empty", p, key)
        return ""

    prefix = f"{key}="
    matches = [line for line in _read_lines(p) if line.startswith(prefix)]
    if not matches:
        return ""
    return unquote(matches[-1][len(prefix):])


def _discover_keys(lines: Iterable[str]) -> List[str]:
    found: Dict[str, None] = {}
    for line in lines:
        if is_comment(line):
            continue
        parts = split_assignment(line)
        if parts is not None and KEY_RE.match(parts[0]):
            found.setdefault(parts[0], None)
    return list(found)


def list_keys(path: Optional[str | os.PathLike]) -> List[str]:
    """Return the keys assigned in a config file, in file order."""
    p = _require_readable(path)
    return _discover_keys(_read_lines(p))


def _select(
    keys: List[str],
    values: Mapping[str, Any],
    *,
    declared_only: bool,
) -> Tuple[List[Tuple[str, ConfigValue]], List[str]]:
    pending: List[Tuple[str, ConfigValue]] = []
    skipped: List[str] = []
    for key in keys:
        value = coerce(values.get(key))
        if value is None:
            logger.debug("Skipping %s (not declared)", key)
            skipped.append(key)
            continue
        if not declared_only and value.is_empty():
            logger.debug("Skipping %s (empty)", key)
            skipped.append(key)
            continue
        check_writable(key, value)
        pending.append((key, value))
    return pending, skipped


def save(
    path: Optional[str | os.PathLike],
    values: Mapping[str, Any],
    keys: Optional[Iterable[str]] = None,
    *,
    declared_only: bool = False,
) -> SaveResult:
    """Write the caller's values for the selected keys back into a config file.

    Without ``keys`` every key already assigned in the file is selected.
    Existing assignments are replaced in place (the last one, with earlier
    duplicates removed); new keys are appended after a blank line. By default
    empty values are skipped; with ``declared_only`` only keys missing from
    ``values`` are skipped.

    Every value is validated before the file is touched, and the file is only
    rewritten when its content changes.
    """

    p = _require_readable(path)
    if isinstance(keys, str):
        keys = [keys]
    lines = p.read_text(encoding="utf-8", errors="surrogateescape").split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    selected = list(dict.fromkeys(keys or ())) or _discover_keys(lines)
    pending, skipped = _select(selected, values, declared_only=declared_only)

    updated: List[str] = []
    appended: List[str] = []
    changed = False

    for key, value in pending:
        new_line = encode_assignment(key, value)
        prefix = f"{key}="
        hits = [i for i, line in enumerate(lines) if line.startswith(prefix)]
        if hits:
            last = hits[-1]
            if lines[last] != new_line:
                lines[last] = new_line
                changed = True
            for i in reversed(hits[:-1]):
                logger.debug("Removing duplicate assignment of %s at line %d", key, i + 1)
                del lines[i]
                changed = True
            updated.append(key)
        else:
            lines.extend(["", new_line])
            appended.append(key)
            changed = True

    if changed:
        p.write_text("\n".join(lines) + "\n", encoding="utf-8", errors="surrogateescape")
        logger.info(
            "Saved %s (updated=%d appended=%d skipped=%d)",
            p,
            len(updated),
            len(appended),
            len(skipped),
        )
    else:
        logger.debug("No changes for %s", p)

    return SaveResult(
        path=str(p),
        updated=updated,
        appended=appended,
        skipped=skipped,
        changed=changed,
    )


@dataclass(frozen=True)
class ConfigStore:
    """A config file path bound to the load/save operations."""

    path: str

    def load(self, *keys: str) -> Dict[str, ConfigValue]:
        return load(self.path, keys)

    def load_value(self, key: str) -> str:
        return load_value(self.path, key)

    def save(
        self,
        values: Mapping[str, Any],
        keys: Optional[Iterable[str]] = None,
        *,
        declared_only: bool = False,
    ) -> SaveResult:
        return save(self.path, values, keys, declared_only=declared_only)
