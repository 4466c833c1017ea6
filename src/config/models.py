"""Config models and loader.

This module defines Pydantic models for file- and environment-based
configuration. The optional JSON application config selects an alternate
dataset file and enables or disables individual tools; environment settings
cover logging, server identity and the simulated latency knob.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import orjson
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseModel):
    """Top-level application configuration.

    Attributes
    ----------
    dataset_path: Optional[str]
        JSON dataset file replacing the bundled fixture. Relative paths are
        resolved against the config file's directory by ``load``.
    enabled_tools: Dict[str, bool]
        Feature flags for tools by name. Empty means every tool is enabled.
    """

    dataset_path: Optional[str] = Field(
        default=None, description="Dataset JSON file (defaults to bundled fixture)"
    )
    enabled_tools: Dict[str, bool] = Field(default_factory=dict)

    @staticmethod
    def load(path: Path) -> "AppConfig":
        """Load application config from a JSON file."""
        cfg = AppConfig.model_validate(orjson.loads(path.read_bytes()))
        if cfg.dataset_path and not Path(cfg.dataset_path).is_absolute():
            cfg = cfg.model_copy(
                update={"dataset_path": str(path.parent / cfg.dataset_path)}
            )
        return cfg


class EnvSettings(BaseSettings):
    """Environment-driven settings and .env support.

    Attributes
    ----------
    log_level: str
        Logging level name (e.g., "DEBUG", "INFO"). Defaults to "INFO".
    server_name: str
        Server identity reported to MCP clients.
    config: Optional[str]
        Path to the JSON application config (``DEVTOOLS_MCP_CONFIG``).
    simulate_latency: bool
        Sleep a random interval before each tool call to emulate a remote
        API. Disabled by default.
    latency_min_ms: int
        Lower bound of the simulated latency in milliseconds.
    latency_max_ms: int
        Upper bound of the simulated latency in milliseconds.
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DEVTOOLS_MCP_")

    log_level: str = Field("INFO")
    server_name: str = Field("ai-developer-tools-mcp")
    config: Optional[str] = None

    simulate_latency: bool = Field(False)
    latency_min_ms: int = Field(50, ge=0)
    latency_max_ms: int = Field(150, ge=0)

    @model_validator(mode="after")
    def _check_latency_bounds(self) -> "EnvSettings":
        if self.latency_max_ms < self.latency_min_ms:
            raise ValueError("latency_max_ms must be >= latency_min_ms")
        return self
