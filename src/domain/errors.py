"""Typed failures raised by operations and caught by the dispatcher.

Every failure carries a machine-readable ``error_type`` and, where it helps
the caller recover, the list of valid alternatives. The dispatcher converts
these into structured tool results; they never escape to the transport.
"""

from __future__ import annotations

from typing import List, Optional, Sequence


class ToolServerError(Exception):
    """Base class for failures surfaced to tool callers."""

    error_type: str = "tool_error"

    def __init__(
        self, message: str, available_options: Optional[Sequence[str]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.available_options: Optional[List[str]] = (
            list(available_options) if available_options is not None else None
        )


class InvalidArgument(ToolServerError):
    """Arguments violate the operation's schema (type, range or enum)."""

    error_type = "invalid_argument"


class UnknownTool(ToolServerError):
    """A tool id is not present in the dataset."""

    error_type = "unknown_tool"

    def __init__(self, tool_id: str, known_ids: Sequence[str] = ()) -> None:
        super().__init__(f"Tool '{tool_id}' not found", available_options=known_ids)
        self.tool_id = tool_id


class UnknownOperation(ToolServerError):
    """No operation is registered under the requested name."""

    error_type = "unknown_operation"

    def __init__(self, name: str, registered: Sequence[str] = ()) -> None:
        super().__init__(f"Unknown tool: {name}", available_options=registered)
        self.name = name
