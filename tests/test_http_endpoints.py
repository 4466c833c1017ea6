"""Test HTTP endpoint functionality."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.server.app import DevToolsMCPServer
from src.server.http import create_app


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    app = create_app(DevToolsMCPServer())
    return TestClient(app)


def test_health_endpoint_no_auth(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_endpoint_with_token_env_needs_no_auth():
    """Probes stay open even when a bearer token is configured."""
    with patch.dict(os.environ, {"DEVTOOLS_MCP_HTTP_TOKEN": "test-token"}):
        test_client = TestClient(create_app(DevToolsMCPServer()))
        response = test_client.get("/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready"}


def test_capabilities(client):
    body = client.get("/capabilities").json()
    assert body["http_auth"] == "disabled"
    assert body["tools"] == [
        "compare_tools",
        "get_trending_tools",
        "get_tool_history",
        "search_tools",
    ]
    assert body["dataset_tools"][0] == "openai"


def test_list_tools(client):
    response = client.get("/tools")
    assert response.status_code == 200
    tools = response.json()["tools"]
    assert len(tools) == 4
    assert tools[0]["inputSchema"]["required"] == ["tools"]


def test_call_tool_success(client):
    response = client.post(
        "/tools/compare_tools", json={"tools": ["openai", "anthropic"]}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["tool"] == "compare_tools"
    assert "• **Most Downloads:** OpenAI SDK (36.1M/month)" in body["text"]


def test_call_tool_without_body(client):
    response = client.post("/tools/search_tools")
    assert response.status_code == 200
    assert "**Found:** 5 tools" in response.json()["text"]


def test_call_tool_invalid_argument(client):
    response = client.post("/tools/get_tool_history", json={"tool": "openai", "months": 1})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error_type"] == "invalid_argument"


def test_call_tool_unknown_tool_id(client):
    response = client.post("/tools/get_tool_history", json={"tool": "vscode"})
    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["error_type"] == "unknown_tool"
    assert "langchain" in detail["available_options"]


def test_call_unknown_operation(client):
    response = client.post("/tools/forecast_tools", json={})
    assert response.status_code == 404
    assert response.json()["detail"]["error_type"] == "unknown_operation"


def test_protected_endpoint_requires_auth():
    with patch.dict(os.environ, {"DEVTOOLS_MCP_HTTP_TOKEN": "test-token"}):
        test_client = TestClient(create_app(DevToolsMCPServer()))

        response = test_client.post("/tools/search_tools", json={})
        assert response.status_code == 401

        response = test_client.post(
            "/tools/search_tools",
            headers={"Authorization": "Bearer wrong"},
            json={},
        )
        assert response.status_code == 403

        response = test_client.post(
            "/tools/search_tools",
            headers={"Authorization": "Bearer test-token"},
            json={"keyword": "sdk"},
        )
        assert response.status_code == 200
        assert "**Found:** 2 tools" in response.json()["text"]


def test_correlation_id_echoed(client):
    response = client.post(
        "/tools/search_tools", json={}, headers={"x-correlation-id": "abc123"}
    )
    assert response.headers["x-correlation-id"] == "abc123"


def test_correlation_id_reaches_dispatcher_logs(client, caplog):
    caplog.set_level(logging.INFO, logger="src")
    client.post("/tools/search_tools", json={}, headers={"x-correlation-id": "abc123"})
    dispatch = [r for r in caplog.records if r.getMessage() == "dispatch.invoke"]
    assert dispatch
    assert {r.req_id for r in dispatch} == {"abc123"}
