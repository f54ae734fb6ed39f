"""Logging configuration for notevault.

Usage in other modules:
    import logging
    log = logging.getLogger(__name__)

The log level can be configured via the NOTEVAULT_LOG_LEVEL environment variable
(DEBUG, INFO, WARNING, ERROR). INFO is the default.
"""

import logging
import os
import sys


def configure_logging() -> None:
    """Configure logging for the notevault package.

    Call this once at application startup (cli.py or server.py).
    Subsequent calls are no-ops.
    """
    root_logger = logging.getLogger("notevault")

    if root_logger.handlers:
        return

    level_name = os.environ.get("NOTEVAULT_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    # stderr only: stdout carries MCP protocol traffic and CLI output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="[%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.propagate = False


def set_quiet_mode(quiet: bool) -> None:
    """Raise the package log threshold to ERROR when quiet output is requested."""
    if quiet:
        logging.getLogger("notevault").setLevel(logging.ERROR)
