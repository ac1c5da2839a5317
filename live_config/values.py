from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Scalar:
    text: str

    def is_empty(self) -> bool:
        return self.text == ""


@dataclass(frozen=True)
class Array:
    items: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so values stay hashable.
        object.__setattr__(self, "items", tuple(self.items))

    def is_empty(self) -> bool:
        return len(self.items) == 0


ConfigValue = Union[Scalar, Array]


def coerce(value: Any) -> Optional[ConfigValue]:
    """Build a ConfigValue from a plain Python value.

    ``None`` means "never declared" and is passed through as None.
    """

    if value is None or isinstance(value, (Scalar, Array)):
        return value
    if isinstance(value, str):
        return Scalar(value)
    if isinstance(value, (list, tuple)):
        if not all(isinstance(v, str) for v in value):
            raise TypeError(f"Array elements must be strings, got {value!r}")
        return Array(tuple(value))
    raise TypeError(f"Unsupported config value type: {type(value).__name__}")


def to_plain(values: Mapping[str, ConfigValue]) -> Dict[str, Union[str, List[str]]]:
    out: Dict[str, Union[str, List[str]]] = {}
    for key, value in values.items():
        if isinstance(value, Array):
            out[key] = list(value.items)
        else:
            out[key] = value.text
    return out
