"""Live system configuration store.

Reads and writes the flat ``KEY=VALUE`` files used by the live-boot and
installer scripts:
- Selective reads (only the keys asked for)
- Scalar and array values
- In-place, line-preserving updates
- Fail-fast on missing/unreadable files
"""

from .errors import (
    ConfigurationError,
    ConfigurationMissing,
    ConfigurationNotFound,
    ConfigurationUnreadable,
    UnsafeValueError,
)
from .store import ConfigStore, SaveResult, list_keys, load, load_value, save
from .values import Array, ConfigValue, Scalar, coerce

__all__ = [
    "Array",
    "ConfigStore",
    "ConfigValue",
    "ConfigurationError",
    "ConfigurationMissing",
    "ConfigurationNotFound",
    "ConfigurationUnreadable",
    "SaveResult",
    "Scalar",
    "UnsafeValueError",
    "coerce",
    "list_keys",
    "load",
    "load_value",
    "save",
]
