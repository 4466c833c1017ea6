"""Shared argument normalization for tool handlers.

This module centralizes input normalization so the stdio and HTTP
transports apply identical semantics before schema validation. Values are
never case-folded because tool ids are matched case-sensitively.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

# Synonym → canonical key
_SYNONYMS: Dict[str, str] = {
    "toolIds": "tools",
    "tool_ids": "tools",
    "timeRange": "time_range",
    "toolId": "tool",
    "tool_id": "tool",
    "minDownloads": "min_downloads",
    "sortBy": "sort_by",
}


def normalize_tool_arguments(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Normalize client-provided arguments for any tool.

    - Unwrap common nesting (``{"params": {...}}`` or ``{"arguments": {...}}``)
    - Map camelCase and alternate spellings to canonical keys without
      overriding a canonical key the caller already supplied
    - Strip surrounding whitespace from a string ``keyword``

    The caller's mapping is never mutated; a new dict is returned.
    """
    if raw is None:
        return {}

    params: Mapping[str, Any] = raw
    for wrapper in ("params", "arguments"):
        inner = params.get(wrapper)
        if isinstance(inner, Mapping) and len(params) == 1:
            params = inner
            break

    out: Dict[str, Any] = {}
    for key, value in params.items():
        canonical = _SYNONYMS.get(key, key)
        if canonical != key and canonical in params:
            continue
        out[canonical] = value

    if isinstance(out.get("keyword"), str):
        out["keyword"] = out["keyword"].strip()
    return out
