"""Logging for slayer.

Every module logs through ``get_logger(__name__)``, so all records flow into
one ``"slayer"`` logger that owns a single stdout handler. Engines log
per-candidate detail at DEBUG and run summaries at INFO.

Monte Carlo worker processes start with a fresh interpreter; the parent
publishes its level in ``SLAYER_LOG_LEVEL`` and the workers apply it on start.
"""

import logging
import os
import sys
from typing import Optional, Union

#: Name of the package-wide parent logger.
ROOT_LOGGER_NAME = "slayer"

#: Environment variable used to hand the parent log level to worker processes.
LOG_LEVEL_ENV = "SLAYER_LOG_LEVEL"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def _resolve_level(level: Union[int, str]) -> Optional[int]:
    """Return a numeric level for ``level``, or None if the name is unknown."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else None


def setup_root_logger(
    level: Union[int, str] = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the single slayer handler; later calls are no-ops.

    Args:
        level: Initial level, numeric or by name.
        format_string: Record format; defaults to ``DEFAULT_FORMAT``.
        handler: Destination; defaults to a stdout stream handler.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(_resolve_level(level) or logging.INFO)

    handler = handler or logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root.addHandler(handler)

    # pytest's caplog listens on the interpreter root
    root.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, inheriting the slayer level and handler.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: Union[int, str]) -> None:
    """Set the level of the slayer logger and its handlers.

    Args:
        level: Numeric level or level name such as ``"debug"``.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """
    resolved = _resolve_level(level)
    if resolved is None:
        raise ValueError(f"Unknown log level '{level}'")

    setup_root_logger()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(resolved)
    for handler in root.handlers:
        handler.setLevel(resolved)


def enable_debug_logging() -> None:
    """Log bottleneck candidates and simulation parameters."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return to INFO."""
    set_global_log_level(logging.INFO)


def publish_log_level() -> None:
    """Export the current slayer level to ``SLAYER_LOG_LEVEL`` for child processes."""
    level = logging.getLogger(ROOT_LOGGER_NAME).getEffectiveLevel()
    os.environ[LOG_LEVEL_ENV] = logging.getLevelName(level)


def apply_env_log_level() -> None:
    """Apply the level published in ``SLAYER_LOG_LEVEL``; unknown names are ignored."""
    name = os.environ.get(LOG_LEVEL_ENV)
    if name and _resolve_level(name) is not None:
        set_global_log_level(name)


def reset_logging() -> None:
    """Drop the slayer handler so the next call reconfigures it (tests only)."""
    global _configured
    _configured = False
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


setup_root_logger()
