"""Tests for the in-memory dataset: lookups, history windows and invariants."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from src.domain.dataset import Dataset
from src.domain.errors import UnknownTool
from src.domain.fixtures import FIXTURE


def test_fixture_has_five_tools_in_insertion_order(dataset):
    assert len(dataset) == 5
    assert dataset.ids() == ["openai", "anthropic", "cursor", "copilot", "langchain"]
    assert [e.id for e in dataset.list_all()] == dataset.ids()


def test_get_tool_and_metrics(dataset):
    tool = dataset.get_tool("anthropic")
    assert tool.name == "Anthropic SDK"
    assert tool.package == "@anthropic-ai/sdk"
    assert tool.category == "llm-api"
    assert dataset.get_metrics("anthropic").npm_downloads_monthly == 13_925_000


def test_lookup_is_case_sensitive(dataset):
    assert "openai" in dataset
    assert "OpenAI" not in dataset
    with pytest.raises(UnknownTool) as exc_info:
        dataset.get_tool("OpenAI")
    assert exc_info.value.available_options == dataset.ids()


@pytest.mark.parametrize("method", ["get_tool", "get_metrics", "get_history", "get_entry"])
def test_unknown_id_raises(dataset, method):
    with pytest.raises(UnknownTool) as exc_info:
        getattr(dataset, method)("vscode")
    assert exc_info.value.message == "Tool 'vscode' not found"


def test_get_history_returns_last_n_points(dataset):
    points = dataset.get_history("openai", 3)
    assert [p.month for p in points] == ["2024-10", "2024-11", "2024-12"]


def test_get_history_more_months_than_stored(dataset):
    assert len(dataset.get_history("cursor", 12)) == 6
    assert len(dataset.get_history("cursor")) == 6


def test_get_history_non_positive_months_is_empty(dataset):
    assert dataset.get_history("cursor", 0) == ()


def test_entries_are_frozen(dataset):
    entry = dataset.get_entry("openai")
    with pytest.raises(Exception):
        entry.metrics.github_stars = 1  # type: ignore[misc]
    assert dataset.get_metrics("openai").github_stars == 18_500


def test_tool_without_history_is_allowed():
    data = copy.deepcopy(FIXTURE)
    del data["history"]["copilot"]
    ds = Dataset.from_mapping(data)
    assert ds.get_history("copilot", 6) == ()


def test_missing_metrics_rejected():
    data = copy.deepcopy(FIXTURE)
    del data["metrics"]["cursor"]
    with pytest.raises(ValueError, match="without metrics"):
        Dataset.from_mapping(data)


def test_history_must_be_ascending():
    data = copy.deepcopy(FIXTURE)
    data["history"]["openai"].reverse()
    with pytest.raises(ValueError, match="ascending"):
        Dataset.from_mapping(data)


def test_orphan_history_rejected():
    data = copy.deepcopy(FIXTURE)
    data["history"]["vscode"] = [{"month": "2024-07", "downloads": 1}]
    with pytest.raises(ValueError, match="unknown tools"):
        Dataset.from_mapping(data)


def test_negative_downloads_rejected():
    data = copy.deepcopy(FIXTURE)
    data["metrics"]["openai"]["npm_downloads_monthly"] = -1
    with pytest.raises(ValueError):
        Dataset.from_mapping(data)


def test_load_from_json_file(tmp_path: Path):
    path = tmp_path / "dataset.json"
    path.write_text(json.dumps(FIXTURE))
    ds = Dataset.load(path)
    assert ds.ids() == list(FIXTURE["tools"].keys())
    assert ds.get_history("langchain", 1)[0].downloads == 5_711_000
