from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from .lib.env import cache_locations

DEFAULT_LOG_PATH = "build/oomph-ide.log"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_CONFIGURED = "_oomph_ide_configured"
_LOG_PATH = "_oomph_ide_log_path"


def _open_log(log_path: str) -> Tuple[logging.Handler, str]:
    """File handler for ``log_path``, or for the cache log if that is not writable."""
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        fallback = cache_locations().log_fallback
        fallback.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(fallback), str(fallback)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Every command, written file and skipped setup is recorded in the log.
    The requested path usually sits inside the build directory; when it
    cannot be created the log goes to the user cache directory instead.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    root.setLevel(level)

    # Calling again (e.g. setup followed by launch) only adjusts the level.
    if getattr(root, _CONFIGURED, False):
        return getattr(root, _LOG_PATH, log_path)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    file_handler, chosen_path = _open_log(log_path)
    handlers = [file_handler]
    if also_console:
        handlers.append(logging.StreamHandler())

    for h in handlers:
        h.setFormatter(fmt)
        root.addHandler(h)

    setattr(root, _CONFIGURED, True)
    setattr(root, _LOG_PATH, chosen_path)

    logging.getLogger(__name__).info("Logging to %s (requested %s)", chosen_path, log_path)
    return chosen_path
