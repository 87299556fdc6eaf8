"""Expose the tool dispatcher as an MCP server on the stdio transport."""

from typing import List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .dispatcher import ToolDispatcher
from ..core.config import WorkerConfig
from ..core.logger import get_logger
from ..tools import ProgressCallback

logger = get_logger(__name__)

SERVER_NAME = "ai-image/mcp"
SERVER_VERSION = "0.1.0"


def build_server(dispatcher: ToolDispatcher) -> Server:
    """Create the MCP server and wire its request handlers to the dispatcher.

    Args:
        dispatcher: Serves ``tools/list`` and ``tools/call``.

    Returns:
        A server ready to be run on any transport.
    """
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return dispatcher.list_tools()

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        on_progress = _progress_reporter(server)
        content = await dispatcher.call_tool(request.params.name, request.params.arguments, on_progress)
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    # Registered without the call_tool() decorator, which would turn McpError into an
    # error result. The session sends it to the client as a typed JSON-RPC error instead.
    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


def _progress_reporter(server: Server) -> Optional[ProgressCallback]:
    """Build a callback sending progress notifications for the current request, if the client asked for them."""
    try:
        ctx = server.request_context
    except LookupError:
        return None

    token = ctx.meta.progressToken if ctx.meta else None
    if token is None:
        return None

    async def report(elapsed: float, message: str) -> None:
        await ctx.session.send_progress_notification(progress_token=token, progress=elapsed, message=message)

    return report


async def serve_stdio(config: WorkerConfig) -> None:
    """Serve the image tools over stdin/stdout until the client disconnects."""
    server = build_server(ToolDispatcher.from_config(config))
    async with stdio_server() as (read_stream, write_stream):
        logger.info("AI Image Generator MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
