"""Observability utilities: logging setup.

This module configures standard logging and integrates `structlog` for
structured logs. Logs go to stderr because stdout carries the MCP stdio
protocol stream.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Parameters
    ----------
    level: str
        Logging level name (e.g., "DEBUG", "INFO"). Defaults to "INFO".

    Behavior
    --------
    - Initializes Python's logging on stderr with the requested level.
    - Configures structlog with a filtering bound logger at the same level.
    - Sets DEBUG level for MCP protocol libraries when DEBUG is requested.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format=("%(asctime)s %(levelname)s %(name)s - %(message)s"),
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
    )

    if numeric_level <= logging.DEBUG:
        for logger_name in ("mcp", "mcp.server", "mcp.server.lowlevel"):
            logging.getLogger(logger_name).setLevel(logging.DEBUG)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
