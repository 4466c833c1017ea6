"""Command-line interface to start the AI developer tools MCP server.

By default the server speaks MCP over stdio so chat clients can launch it
as a subprocess. ``--http`` serves the FastAPI transport with uvicorn
instead.

Usage
-----
    ai-devtools-mcp
    ai-devtools-mcp --config config.json -v
    ai-devtools-mcp --http --port 8080
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import logging
from pathlib import Path
from typing import Optional

from ..config.models import EnvSettings
from ..observability import setup_logging
from .app import DevToolsMCPServer, create_server
from .http import create_app
from .mcp_stdio import run_stdio

logger = logging.getLogger(__name__)


async def _init_from_config(
    config_path: Optional[Path], settings: Optional[EnvSettings] = None
) -> DevToolsMCPServer:
    """Build the server from a JSON config file.

    Parameters
    ----------
    config_path: Path | None
        Filesystem path to the JSON configuration file, or ``None`` to use
        ``DEVTOOLS_MCP_CONFIG`` (if set) and the bundled dataset.

    Returns
    -------
    DevToolsMCPServer
        A server instance ready to start.
    """
    server = create_server(settings, config_path)
    logger.info("cli.server.ready", extra={"tools": server.tool_names})
    return server


async def _run_stdio(config_path: Optional[Path], settings: EnvSettings) -> None:
    server = await _init_from_config(config_path, settings)
    await run_stdio(server, settings)


def main() -> None:
    """CLI entrypoint for running the AI developer tools MCP server.

    Provides two modes:
    - MCP over stdio (default)
    - HTTP mode with FastAPI when --http is specified
    """
    parser = argparse.ArgumentParser(description="AI developer tools MCP server")
    parser.add_argument("--config", help="Path to JSON app config")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging level (overrides environment)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (once sets DEBUG)",
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Run HTTP server instead of MCP stdio",
    )
    parser.add_argument(
        "--host", default="127.0.0.1", help="HTTP bind host (default 127.0.0.1)"
    )
    parser.add_argument("--port", type=int, default=8080, help="HTTP port")
    args = parser.parse_args()

    settings = EnvSettings()
    effective_level = args.log_level or (
        "DEBUG" if args.verbose > 0 else settings.log_level.upper()
    )
    # Apply early so subsequent imports use configured level
    setup_logging(effective_level)
    config_path = Path(args.config) if args.config else None

    if args.http:
        uvicorn = importlib.import_module("uvicorn")
        app = create_app(create_server(settings, config_path), settings)
        uvicorn.run(
            app,
            host=args.host,
            port=args.port,
            log_level=effective_level.lower(),
        )
        return

    try:
        asyncio.run(_run_stdio(config_path, settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
