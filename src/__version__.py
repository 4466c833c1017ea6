"""
Version information for the AI developer tools MCP server.

Version numbers follow semantic versioning (https://semver.org/).

The package version is read from the installed distribution metadata so
pyproject.toml stays the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ai-devtools-mcp")
except PackageNotFoundError:
    # Development checkout without an installed distribution
    __version__ = "0.0.0-dev"
