"""Immutable in-memory dataset of tracked tools.

The dataset is built once at process start (from the bundled fixture or a
JSON file) and injected into the server. It owns every ``ToolRecord``,
``MetricsSnapshot`` and ``HistoryPoint``; callers only receive frozen views.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import orjson

from .errors import UnknownTool
from .fixtures import FIXTURE
from .models import HistoryPoint, MetricsSnapshot, ToolEntry, ToolRecord

logger = logging.getLogger(__name__)


class Dataset:
    """Read-only table of tools, current metrics and monthly history.

    Lookups are exact and case-sensitive. Unknown ids raise ``UnknownTool``
    rather than returning empty defaults; only history may legitimately be
    empty.
    """

    def __init__(
        self,
        tools: Mapping[str, ToolRecord],
        metrics: Mapping[str, MetricsSnapshot],
        history: Mapping[str, Tuple[HistoryPoint, ...]],
    ) -> None:
        _check_invariants(tools, metrics, history)
        self._tools = MappingProxyType(dict(tools))
        self._metrics = MappingProxyType(dict(metrics))
        self._history = MappingProxyType(
            {tid: tuple(history.get(tid, ())) for tid in tools}
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Dataset":
        """Build a dataset from the ``tools``/``metrics``/``history`` layout.

        Raises
        ------
        ValueError
            If a record fails validation or the dataset invariants are broken
            (pydantic's ``ValidationError`` is a ``ValueError``).
        """
        raw_tools: Mapping[str, Dict[str, Any]] = data.get("tools") or {}
        raw_metrics: Mapping[str, Dict[str, Any]] = data.get("metrics") or {}
        raw_history: Mapping[str, List[Dict[str, Any]]] = data.get("history") or {}

        tools = {
            tid: ToolRecord.model_validate({**body, "id": tid})
            for tid, body in raw_tools.items()
        }
        metrics = {
            tid: MetricsSnapshot.model_validate(body)
            for tid, body in raw_metrics.items()
        }
        history = {
            tid: tuple(HistoryPoint.model_validate(p) for p in points)
            for tid, points in raw_history.items()
        }
        return cls(tools, metrics, history)

    @classmethod
    def load(cls, path: Path) -> "Dataset":
        """Load a dataset from a JSON file with the fixture layout."""
        data = orjson.loads(path.read_bytes())
        dataset = cls.from_mapping(data)
        logger.info(
            "dataset.loaded", extra={"path": str(path), "tools": len(dataset)}
        )
        return dataset

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def ids(self) -> List[str]:
        """Tool ids in insertion order."""
        return list(self._tools.keys())

    def get_tool(self, tool_id: str) -> ToolRecord:
        try:
            return self._tools[tool_id]
        except KeyError:
            raise UnknownTool(tool_id, self.ids()) from None

    def get_metrics(self, tool_id: str) -> MetricsSnapshot:
        try:
            return self._metrics[tool_id]
        except KeyError:
            raise UnknownTool(tool_id, self.ids()) from None

    def get_history(
        self, tool_id: str, months: Optional[int] = None
    ) -> Tuple[HistoryPoint, ...]:
        """Return the last ``months`` history points (all when ``None``).

        Shorter series are returned as-is; asking for more months than are
        stored is not an error.
        """
        try:
            points = self._history[tool_id]
        except KeyError:
            raise UnknownTool(tool_id, self.ids()) from None
        if months is None:
            return points
        if months <= 0:
            return ()
        return points[-months:]

    def get_entry(self, tool_id: str) -> ToolEntry:
        return ToolEntry(tool=self.get_tool(tool_id), metrics=self.get_metrics(tool_id))

    def list_all(self) -> List[ToolEntry]:
        """All tools paired with their metrics, in insertion order."""
        return [
            ToolEntry(tool=tool, metrics=self._metrics[tid])
            for tid, tool in self._tools.items()
        ]


def _check_invariants(
    tools: Mapping[str, ToolRecord],
    metrics: Mapping[str, MetricsSnapshot],
    history: Mapping[str, Tuple[HistoryPoint, ...]],
) -> None:
    for tid, tool in tools.items():
        if tool.id != tid:
            raise ValueError(f"Tool key '{tid}' does not match record id '{tool.id}'")
    missing = [tid for tid in tools if tid not in metrics]
    if missing:
        raise ValueError(f"Tools without metrics: {', '.join(missing)}")
    orphans = [tid for tid in list(metrics) + list(history) if tid not in tools]
    if orphans:
        raise ValueError(f"Entries for unknown tools: {', '.join(sorted(set(orphans)))}")
    for tid, points in history.items():
        months = [p.month for p in points]
        if any(a >= b for a, b in zip(months, months[1:])):
            raise ValueError(
                f"History for '{tid}' must be ascending by month without duplicates"
            )


def default_dataset() -> Dataset:
    """Dataset built from the bundled fixture."""
    return Dataset.from_mapping(FIXTURE)
