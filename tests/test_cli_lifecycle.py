"""Server CLI lifecycle smoke test.

Builds the server from a minimal config file and starts and stops it to
ensure no unhandled exceptions occur during startup/shutdown.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.config.models import EnvSettings
from src.server import cli
from src.server.cli import _init_from_config


@pytest.mark.asyncio
async def test_cli_init_from_config_tmp(tmp_path: Path) -> None:
    """Start and stop server using a minimal temporary JSON config."""
    cfg = {"enabled_tools": {"compare_tools": True, "get_trending_tools": True}}
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps(cfg))

    server = await _init_from_config(cfg_path)
    assert server.tool_names == ["compare_tools", "get_trending_tools"]
    await server.start()
    await server.stop()


@pytest.mark.asyncio
async def test_cli_init_without_config() -> None:
    server = await _init_from_config(None)
    assert len(server.tool_names) == 4
    result = await server.invoke("get_trending_tools", {"limit": 3})
    assert not result.is_error


@pytest.mark.asyncio
async def test_cli_stdio_reuses_its_settings(monkeypatch) -> None:
    """The stdio path receives the CLI's settings instead of rebuilding them."""
    captured = {}

    async def fake_run_stdio(server, settings):
        captured["server"] = server
        captured["settings"] = settings

    monkeypatch.setattr(cli, "run_stdio", fake_run_stdio)
    settings = EnvSettings(_env_file=None, server_name="devtools-test")
    await cli._run_stdio(None, settings)
    assert captured["settings"] is settings
    assert captured["server"].tool_names == [
        "compare_tools",
        "get_trending_tools",
        "get_tool_history",
        "search_tools",
    ]
