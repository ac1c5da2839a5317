from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Tuple

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "live-config.log"

_FILE_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
_CONSOLE_FORMAT = logging.Formatter("%(levelname)s: %(message)s")


def _open_log_file(log_path: str) -> Tuple[logging.Handler, str]:
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Attach a file handler and a terse stderr handler to the root logger.

    The store logs fatal precondition failures at ERROR and per-save summaries
    at INFO; the file handler keeps timestamps and module names for both.
    On a live system /var/log may be read-only, in which case the log goes to
    ./live-config.log instead. Repeated calls keep the first configuration.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_live_config_log_path", None):
        return root._live_config_log_path  # type: ignore[attr-defined]

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setFormatter(_FILE_FORMAT)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(_CONSOLE_FORMAT)
        root.addHandler(console)

    setattr(root, "_live_config_log_path", chosen_path)

    if chosen_path != log_path:
        logging.getLogger(__name__).warning(
            "Cannot write %s, logging to %s", log_path, chosen_path
        )
    return chosen_path
