from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    config_default: str = "/etc/live/config.conf"
    log_default: str = "/var/log/live-config.log"


PATHS = Paths()
