from __future__ import annotations


class ConfigurationError(SystemExit):
    """Fatal precondition failure on a configuration file.

    Derives from SystemExit so an unhandled failure ends the process with
    status 1 and the message on stderr. ``except Exception`` does not catch it.
    """


class ConfigurationMissing(ConfigurationError):
    pass


class ConfigurationNotFound(ConfigurationError):
    pass


class ConfigurationUnreadable(ConfigurationError):
    pass


class UnsafeValueError(ValueError):
    """A key or value the KEY=VALUE format cannot store and read back."""
