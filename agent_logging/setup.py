"""
Logging Setup

Each top-level logger (``toolkit``, ``integrations``) gets a rotating log
file under the state directory and, optionally, a stdout handler. Module
loggers created with ``logging.getLogger(__name__)`` propagate into these.
"""
import logging
import logging.handlers
import os
import sys
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Union

from toolkit.state_paths import resolve_state_dir

AGENT_LOGGERS = ("toolkit", "integrations")

FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _level(name: Optional[str], default: int = logging.INFO) -> int:
    if not name:
        return default
    return getattr(logging, name.upper(), default)


def log_file_path(
    name: str,
    log_dir: Optional[Union[str, Path]] = None,
    day: Optional[date] = None,
) -> Path:
    """Dated log file for ``name``: <log_dir>/<name>_YYYYMMDD.log."""
    if log_dir is None:
        directory = resolve_state_dir() / "logs" / name.lower()
    else:
        directory = Path(os.path.expanduser(str(log_dir)))
    stamp = (day or date.today()).strftime("%Y%m%d")
    return directory / f"{name.lower()}_{stamp}.log"


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def setup_logging(
    agent_name: str,
    log_dir: Optional[str] = None,
    log_level: str = "INFO",
    console_output: bool = True,
    console_level: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a rotating file handler and an optional stdout handler.

    Calling it again for the same name replaces the previous handlers.

    Args:
        agent_name: Logger name (toolkit, integrations, ...)
        log_dir: Directory for log files (defaults to <state_dir>/logs/<agent_name>/)
        log_level: Logger threshold (DEBUG, INFO, WARNING, ERROR)
        console_output: Whether to also log to stdout
        console_level: Stdout threshold (defaults to log_level)

    Returns:
        Configured logger instance

    Example:
        >>> from agent_logging import setup_logging
        >>> logger = setup_logging("toolkit", console_level="WARNING")
        >>> logger.warning("Anchor '## Notes' not found")
    """
    logger = logging.getLogger(agent_name)
    logger.setLevel(_level(log_level))

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    path = log_file_path(agent_name, log_dir)
    logger.addHandler(_file_handler(path))
    if console_output:
        logger.addHandler(_console_handler(_level(console_level or log_level)))

    # Keep toolkit records out of the root logger
    logger.propagate = False

    logger.debug(f"{agent_name} logging to {path}")
    return logger


def get_agent_logger(agent_name: str) -> logging.Logger:
    """Return the named logger, configuring it on first use."""
    logger = logging.getLogger(agent_name)
    if not logger.handlers:
        setup_logging(agent_name)
    return logger


def configure_agent_loggers(
    log_level: Optional[str] = None,
    console_output: bool = True,
    console_level: Optional[str] = None,
    names: Iterable[str] = AGENT_LOGGERS,
) -> None:
    """Configure the toolkit's top-level loggers; LOG_LEVEL is the fallback level."""
    level = log_level or os.getenv("LOG_LEVEL", "INFO")
    for name in names:
        setup_logging(
            name,
            log_level=level,
            console_output=console_output,
            console_level=console_level,
        )
