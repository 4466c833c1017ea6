"""Tests for file and environment configuration and server construction."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from src.config.models import AppConfig, EnvSettings
from src.domain.fixtures import FIXTURE
from src.server.app import create_server


def test_env_settings_defaults(monkeypatch):
    monkeypatch.delenv("DEVTOOLS_MCP_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEVTOOLS_MCP_SERVER_NAME", raising=False)
    settings = EnvSettings(_env_file=None)
    assert settings.log_level == "INFO"
    assert settings.server_name == "ai-developer-tools-mcp"
    assert settings.simulate_latency is False
    assert (settings.latency_min_ms, settings.latency_max_ms) == (50, 150)


def test_env_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DEVTOOLS_MCP_SIMULATE_LATENCY", "true")
    monkeypatch.setenv("DEVTOOLS_MCP_LATENCY_MIN_MS", "5")
    monkeypatch.setenv("DEVTOOLS_MCP_LATENCY_MAX_MS", "10")
    settings = EnvSettings(_env_file=None)
    assert settings.simulate_latency is True
    assert settings.latency_max_ms == 10


def test_env_settings_rejects_inverted_latency(monkeypatch):
    monkeypatch.setenv("DEVTOOLS_MCP_LATENCY_MIN_MS", "200")
    monkeypatch.setenv("DEVTOOLS_MCP_LATENCY_MAX_MS", "100")
    with pytest.raises(ValidationError):
        EnvSettings(_env_file=None)


def test_app_config_resolves_relative_dataset_path(tmp_path: Path):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"dataset_path": "data/tools.json"}))
    cfg = AppConfig.load(cfg_path)
    assert cfg.dataset_path == str(tmp_path / "data" / "tools.json")
    assert cfg.enabled_tools == {}


def test_create_server_defaults_to_fixture():
    server = create_server(EnvSettings(_env_file=None))
    assert server.dataset.ids() == list(FIXTURE["tools"].keys())
    assert len(server.tool_names) == 4


@pytest.mark.asyncio
async def test_create_server_from_config(tmp_path: Path):
    data = json.loads(json.dumps(FIXTURE))
    data["tools"] = {k: v for k, v in data["tools"].items() if k != "copilot"}
    del data["metrics"]["copilot"]
    del data["history"]["copilot"]
    (tmp_path / "tools.json").write_text(json.dumps(data))
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(
        json.dumps(
            {
                "dataset_path": "tools.json",
                "enabled_tools": {"search_tools": True, "get_tool_history": True},
            }
        )
    )

    server = create_server(EnvSettings(_env_file=None), cfg_path)
    assert server.tool_names == ["get_tool_history", "search_tools"]
    assert "copilot" not in server.dataset
    result = await server.invoke("get_tool_history", {"tool": "copilot"})
    assert result.error_type == "unknown_tool"


def test_create_server_invalid_dataset_fails(tmp_path: Path):
    (tmp_path / "tools.json").write_text(json.dumps({"tools": {"x": {}}}))
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"dataset_path": "tools.json"}))
    with pytest.raises(ValueError):
        create_server(EnvSettings(_env_file=None), cfg_path)
