from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp.types import TextContent, Tool
from pydantic import BaseModel, Field

ProgressCallback = Callable[[float, str], Awaitable[None]]
ToolHandler = Callable[[Dict[str, Any], Optional[ProgressCallback]], Awaitable[List[TextContent]]]


class ToolDefinition(BaseModel):
    """
    Represents a tool advertised to MCP clients.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        handler: Coroutine function receiving the raw call arguments and an optional progress
            callback, and returning content blocks.
        input_schema: JSON schema of the accepted arguments, as sent in the catalog.
        args_model: Optional Pydantic model the schema was generated from.
    """

    name: str
    description: str
    handler: ToolHandler
    input_schema: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})
    args_model: Optional[Type[BaseModel]] = None

    def to_mcp_tool(self) -> Tool:
        """Returns the catalog entry for this tool."""
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)
