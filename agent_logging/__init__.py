"""File and console logging for the toolkit's top-level loggers."""
from .setup import (
    AGENT_LOGGERS,
    configure_agent_loggers,
    get_agent_logger,
    log_file_path,
    setup_logging,
)

__all__ = [
    "AGENT_LOGGERS",
    "configure_agent_loggers",
    "get_agent_logger",
    "log_file_path",
    "setup_logging",
]
