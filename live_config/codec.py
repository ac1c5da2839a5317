from __future__ import annotations

import re
import shlex
from typing import List, Optional, Tuple

from .errors import UnsafeValueError
from .values import Array, ConfigValue, Scalar

KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_ARRAY_RE = re.compile(r"^\((.*)\)$", re.DOTALL)


def split_assignment(line: str) -> Optional[Tuple[str, str]]:
    """Split ``KEY=VALUE`` on the first ``=``; None if there is no ``=``."""
    key, sep, raw = line.partition("=")
    if not sep:
        return None
    return key, raw


def is_comment(line: str) -> bool:
    return line.startswith("#")


def unquote(raw: str) -> str:
    """Strip one trailing and one leading double quote, then the same for single quotes."""
    value = raw
    for q in ('"', "'"):
        if value.endswith(q):
            value = value[:-1]
        if value.startswith(q):
            value = value[1:]
    return value


def _split_elements(interior: str) -> List[str]:
    try:
        return shlex.split(interior)
    except ValueError:
        # Unbalanced quoting: plain whitespace split, one quote layer per element.
        return [unquote(e) for e in interior.split()]


def decode_value(raw: str) -> ConfigValue:
    value = unquote(raw)
    m = _ARRAY_RE.match(value)
    if m:
        return Array(tuple(_split_elements(m.group(1))))
    return Scalar(value)


def encode_value(value: ConfigValue) -> str:
    if isinstance(value, Array):
        return "(" + " ".join(f'"{item}"' for item in value.items) + ")"
    return f'"{value.text}"'


def encode_assignment(key: str, value: ConfigValue) -> str:
    return f"{key}={encode_value(value)}"


def check_writable(key: str, value: ConfigValue) -> None:
    """Reject keys and values that would not read back unchanged.

    The format has no escaping scheme, so quote characters, line breaks and
    scalars that look like arrays are refused instead of being mangled.
    """

    if not KEY_RE.match(key):
        raise UnsafeValueError(f"Invalid key name: {key!r}")

    if isinstance(value, Array):
        for item in value.items:
            if any(c in item for c in ('"', "\\", "\n", "\r")):
                raise UnsafeValueError(
                    f"{key}: array element {item!r} contains a quote, backslash or line break"
                )
        return

    text = value.text
    if any(c in text for c in ('"', "\n", "\r")):
        raise UnsafeValueError(f"{key}: value contains a double quote or line break")
    if text.startswith("'") or text.endswith("'"):
        raise UnsafeValueError(f"{key}: value may not start or end with a single quote")
    if _ARRAY_RE.match(text):
        raise UnsafeValueError(f"{key}: scalar value {text!r} would be read back as an array")
