"""Pytest configuration for test suite.

Ensures the project root is on ``sys.path`` so imports like ``import src``
resolve correctly regardless of the working directory pytest chooses.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_syspath() -> None:
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        # Prepend to prefer local sources over site-packages
        sys.path.insert(0, project_root_str)


_ensure_project_root_on_syspath()


@pytest.fixture
def dataset():
    """The bundled five-tool fixture dataset."""
    from src.domain.dataset import default_dataset

    return default_dataset()


@pytest.fixture
def server(dataset):
    """Dispatcher over the fixture dataset with no simulated latency."""
    from src.server.app import DevToolsMCPServer

    return DevToolsMCPServer(dataset=dataset)


@pytest.fixture(autouse=True)
def clear_server_env(monkeypatch):
    """Keep host DEVTOOLS_MCP_* variables from leaking into tests."""
    for name in (
        "DEVTOOLS_MCP_HTTP_TOKEN",
        "DEVTOOLS_MCP_CORS_ORIGINS",
        "DEVTOOLS_MCP_CONFIG",
        "DEVTOOLS_MCP_SIMULATE_LATENCY",
    ):
        monkeypatch.delenv(name, raising=False)
