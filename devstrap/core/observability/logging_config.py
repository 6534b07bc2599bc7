"""
Logging configuration — central setup for the CLI.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    DEVSTRAP_LOG_LEVEL env var  >  settings file ``log_level``  >  WARNING

Optional file output via DEVSTRAP_LOG_FILE / DEVSTRAP_LOG_FILE_LEVEL
env vars (or ``log_file`` in the settings file).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

LOG_LEVEL_ENV_VAR = "DEVSTRAP_LOG_LEVEL"
LOG_FILE_ENV_VAR = "DEVSTRAP_LOG_FILE"
LOG_FILE_LEVEL_ENV_VAR = "DEVSTRAP_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

# WARNING level: minimal, no noise
_FMT_MINIMAL = "%(message)s"

# INFO level: timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG level: full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output: always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    numeric_level = _parse_level(level)

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    logging.raiseExceptions = False


def setup_logging_from_env(
    environ: Mapping[str, str],
    *,
    default_level: str | None = None,
    default_file: str | None = None,
) -> str:
    """Resolve levels from the environment and configure logging.

    ``default_level`` / ``default_file`` come from the settings file and
    lose to the environment variables.

    Returns:
        The console level name that was applied.
    """
    level = environ.get(LOG_LEVEL_ENV_VAR) or default_level or "WARNING"
    setup_logging(
        level=level,
        log_file=environ.get(LOG_FILE_ENV_VAR) or default_file,
        log_file_level=environ.get(LOG_FILE_LEVEL_ENV_VAR),
    )
    return level.upper()


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
