"""
Logging configuration for the Expense Tracker API.

``setup_logging`` installs the service's handlers on the root logger: a
console handler and, when ``LOG_FILE`` is set, a file handler.  The
handlers are tagged with ``HANDLER_NAME``.  Each ``create_app`` call
replaces the tagged handlers, so reconfiguring never stacks duplicates
and a new log file takes effect.  Handlers installed by anyone else
(uvicorn, the test runner) are left untouched.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "expense_tracker"


def _resolve_level(level: str) -> Optional[int]:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else None


def _remove_own_handlers(root: logging.Logger) -> None:
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
        handler.close()


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the service.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; an unknown name falls back to ``INFO`` with a
        warning.
    logfile : Optional[str]
        Path to a file to log messages to, resolved against the
        current working directory.  If omitted, no file handler is
        added.
    """
    root = logging.getLogger()
    numeric_level = _resolve_level(level)
    root.setLevel(numeric_level if numeric_level is not None else logging.INFO)
    _remove_own_handlers(root)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if numeric_level is None:
        logging.getLogger(__name__).warning("Unknown log level %r, using INFO", level)
