"""
AI developer tools MCP package.

This package hosts the MCP server that answers questions about AI developer
tool adoption (comparison, trending, history and search) over stdio and
HTTP. See README.md for usage.
"""

from .__version__ import __version__

__all__ = ["__version__"]
