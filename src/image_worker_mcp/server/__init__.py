"""MCP server surface of the image worker."""

from .app import SERVER_NAME, build_server, serve_stdio
from .catalog import SIZE_PRESETS, build_registry
from .dispatcher import ToolDispatcher

__all__ = ["SERVER_NAME", "build_server", "serve_stdio", "SIZE_PRESETS", "build_registry", "ToolDispatcher"]
