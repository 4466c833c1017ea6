"""Tool discovery and result models for the AI developer tools server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..domain.errors import ToolServerError


class ToolDescriptor(BaseModel):
    """Discovery entry for one registered tool (MCP ``tools/list`` shape)."""

    name: str
    description: str
    inputSchema: Dict[str, Any] = Field(
        ..., description="JSON schema of the tool's arguments"
    )


class ToolResult(BaseModel):
    """Outcome of a single tool invocation.

    Fields
    ------
    text: str
        Rendered report on success, or a short message prefixed with
        ``Error:`` on failure.
    is_error: bool
        True when the call failed.
    error_type: str | None
        Machine-readable failure classification (``invalid_argument``,
        ``unknown_tool``, ``unknown_operation``, ``internal_error``).
    available_options: list[str] | None
        Valid alternatives when the failure is about an unknown name or id.
    """

    text: str
    is_error: bool = False
    error_type: Optional[str] = None
    available_options: Optional[List[str]] = None

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def failure(cls, exc: ToolServerError) -> "ToolResult":
        text = f"Error: {exc.message}"
        if exc.available_options:
            text += f"\n\nAvailable options: {', '.join(exc.available_options)}"
        return cls(
            text=text,
            is_error=True,
            error_type=exc.error_type,
            available_options=exc.available_options,
        )

    def to_mcp(self) -> Dict[str, Any]:
        """MCP ``tools/call`` result payload."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }
