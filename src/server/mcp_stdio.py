"""MCP stdio server exposing the AI developer tools to chat clients.

This module registers the four query tools on a FastMCP application from
the Python MCP SDK and serves them over stdio. Each tool forwards its
arguments to ``DevToolsMCPServer.invoke``; failed calls are raised as
``ToolError`` so the SDK flags the result with ``isError``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from typing import Any, Callable, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.server.fastmcp.tools import Tool

from ..config.models import EnvSettings
from ..observability import setup_logging
from .app import DevToolsMCPServer, create_server

logger = logging.getLogger(__name__)


async def _call(app: DevToolsMCPServer, name: str, arguments: Dict[str, Any]) -> str:
    result = await app.invoke(name, arguments)
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def _tool_functions(app: DevToolsMCPServer) -> Dict[str, Callable[..., Any]]:
    """Coroutine wrappers forwarding each tool's arguments to the dispatcher.

    Signatures are typed loosely; range and enum checks belong to each
    operation's ``validate``.
    """

    async def compare_tools(tools: List[str], time_range: str = "30d") -> str:
        """Compare 2-3 tools by downloads, stars, community and growth.

        Args:
            tools: 2-3 tool ids (openai, anthropic, cursor, copilot, langchain).
            time_range: 7d, 30d or 90d. 90d compares against three months back.
        """
        return await _call(
            app, "compare_tools", {"tools": tools, "time_range": time_range}
        )

    async def get_trending_tools(
        time_range: str = "30d", limit: int = 5, category: str = "all"
    ) -> str:
        """Rank tools by download growth.

        Args:
            time_range: 7d, 30d or 90d.
            limit: Number of tools to return (3-10).
            category: llm-api, editor, assistant, framework or all.
        """
        return await _call(
            app,
            "get_trending_tools",
            {"time_range": time_range, "limit": limit, "category": category},
        )

    async def get_tool_history(tool: str, months: int = 6) -> str:
        """Monthly download history with growth analysis.

        Args:
            tool: Tool id.
            months: Months of history to return (3-12).
        """
        return await _call(app, "get_tool_history", {"tool": tool, "months": months})

    async def search_tools(
        category: Optional[str] = None,
        min_downloads: Optional[int] = None,
        keyword: Optional[str] = None,
        sort_by: str = "downloads",
    ) -> str:
        """Filter tools and summarize the matches.

        Args:
            category: llm-api, editor, assistant or framework.
            min_downloads: Minimum monthly downloads (inclusive).
            keyword: Case-insensitive match on name or description.
            sort_by: downloads, stars or name.
        """
        args: Dict[str, Any] = {"sort_by": sort_by}
        if category is not None:
            args["category"] = category
        if min_downloads is not None:
            args["min_downloads"] = min_downloads
        if keyword is not None:
            args["keyword"] = keyword
        return await _call(app, "search_tools", args)

    return {
        "compare_tools": compare_tools,
        "get_trending_tools": get_trending_tools,
        "get_tool_history": get_tool_history,
        "search_tools": search_tools,
    }


def _build_tools(app: DevToolsMCPServer) -> List[Tool]:
    """FastMCP tools for every enabled operation.

    The advertised ``inputSchema`` is the operation's own schema (enums,
    bounds, required keys) rather than the one inferred from the wrapper
    signature.
    """
    functions = _tool_functions(app)
    tools: List[Tool] = []
    for descriptor in app.list_tools():
        fn = functions.get(descriptor.name)
        if fn is None:
            logger.warning("mcp.tools.unmapped", extra={"tool": descriptor.name})
            continue
        tool = Tool.from_function(
            fn, name=descriptor.name, description=descriptor.description
        )
        tools.append(tool.model_copy(update={"parameters": descriptor.inputSchema}))
    logger.info("mcp.tools.registered", extra={"tools": [t.name for t in tools]})
    return tools


def build_mcp_app(app: DevToolsMCPServer, name: str) -> FastMCP:
    """Create a FastMCP app named ``name`` with the server's tools registered."""
    return FastMCP(name, tools=_build_tools(app))


async def _serve_forever(mcp_app: FastMCP, app: DevToolsMCPServer) -> None:
    """Run FastMCP stdio server with graceful shutdown.

    Handles Ctrl-C (SIGINT) to exit cleanly without traceback; a second
    SIGINT exits immediately.
    """
    logger.info("Starting MCP stdio server (attach your MCP client)...")
    shutdown_event = asyncio.Event()
    shutting_down = False

    def _on_sigint() -> None:
        nonlocal shutting_down
        if not shutting_down:
            shutting_down = True
            logger.info("Shutting down MCP stdio server...")
            shutdown_event.set()
        else:
            os._exit(130)

    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGINT, _on_sigint)
    except NotImplementedError:
        pass

    run_task = asyncio.create_task(mcp_app.run_stdio_async())
    wait_task = asyncio.create_task(shutdown_event.wait())
    await asyncio.wait([run_task, wait_task], return_when=asyncio.FIRST_COMPLETED)
    if not run_task.done():
        run_task.cancel()
        await asyncio.sleep(0)
    wait_task.cancel()
    await app.stop()


async def run_stdio(
    app: Optional[DevToolsMCPServer] = None, settings: Optional[EnvSettings] = None
) -> None:
    """Build the server (unless given), register tools and serve over stdio."""
    settings = settings if settings is not None else EnvSettings()
    if app is None:
        app = create_server(settings)
    mcp_app = build_mcp_app(app, settings.server_name)
    await app.start()
    logger.info(
        "mcp.stdio.ready",
        extra={"server_name": settings.server_name, "tools": app.tool_names},
    )
    await _serve_forever(mcp_app, app)


def main() -> None:
    """Entrypoint for ``python -m src.server.mcp_stdio``.

    Honors ``DEVTOOLS_MCP_LOG_LEVEL`` unless logging is already configured.
    The ``ai-devtools-mcp`` console script goes through ``cli.main`` instead.
    """
    settings = EnvSettings()
    if not logging.getLogger().hasHandlers():
        setup_logging(settings.log_level)
    try:
        asyncio.run(run_stdio(settings=settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
