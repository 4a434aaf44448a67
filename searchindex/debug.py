import logging
import os
from typing import Optional


_LOGGER: Optional[logging.Logger] = None
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _debug_enabled() -> bool:
    level_env = os.environ.get("SEARCHINDEX_DEBUG", "0").lower()
    return level_env in {"1", "true", "yes", "on", "debug"}


def _log_path(debug_enabled: bool) -> Optional[str]:
    log_path = os.environ.get("SEARCHINDEX_LOG")
    if log_path:
        return os.path.expanduser(log_path)
    if debug_enabled:
        return os.path.join(os.getcwd(), "searchindex_debug.log")
    return None


def get_logger(name: str = "searchindex") -> logging.Logger:
    """Return a child of the package logger, configuring it on first use.

    Handlers are only attached when nothing else (an embedding application or
    the root logger) has configured logging already.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER.getChild(name)

    debug_enabled = _debug_enabled()
    level = logging.DEBUG if debug_enabled else logging.INFO
    logger = logging.getLogger("searchindex")
    logger.setLevel(level)
    _LOGGER = logger

    if logger.handlers or logging.getLogger().handlers:
        return logger.getChild(name)

    log_path = _log_path(debug_enabled)
    handler: logging.Handler
    if log_path is None:
        handler = logging.NullHandler()
    else:
        try:
            handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError as exc:
            handler = logging.StreamHandler()
            logger.warning("Failed to create log file '%s': %s. Falling back to standard error.", log_path, exc)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger.getChild(name)


def reset_logger() -> None:
    """Forget the cached logger so the next call re-reads the environment.

    Used by the CLI after ``--debug`` flips SEARCHINDEX_DEBUG.
    """
    global _LOGGER
    logger = logging.getLogger("searchindex")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _LOGGER = None
