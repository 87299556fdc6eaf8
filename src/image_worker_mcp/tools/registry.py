"""Tool registry holding the catalog advertised to MCP clients."""

from typing import Any, Dict, Iterable, List, Optional, Type, Union

from mcp.types import Tool
from pydantic import BaseModel

from .models import ToolDefinition, ToolHandler
from .schema import SchemaValidator
from ..core.exceptions import ToolNotFoundError, ToolRegistrationError
from ..core.logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    A central registry of the tools this server exposes.

    It maps tool names to their definitions (description and input schema, as
    sent to the client) and to the coroutine handling the call.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition],
        description: Optional[str] = None,
        handler: Optional[ToolHandler] = None,
        args_model: Optional[Type[BaseModel]] = None,
        required: Iterable[str] = (),
    ) -> ToolDefinition:
        """
        Register a new tool.

        Either pass a complete `ToolDefinition`, or the name together with a
        description, a handler and the Pydantic model describing its arguments.

        Args:
            name_or_tool: Either a `ToolDefinition` object or the name of the tool.
            description: What the tool does. Required if `name_or_tool` is a string.
            handler: The coroutine function handling calls. Required if `name_or_tool` is a string.
            args_model: Model the input schema is generated from. Without it the tool takes no arguments.
            required: Extra property names to mark as required in the generated schema.

        Returns:
            The registered definition.

        Raises:
            ToolRegistrationError: If arguments are missing or if the tool already exists.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        else:
            if handler is None:
                raise ToolRegistrationError("If passing name as string, handler is required.")
            if not description:
                raise ToolRegistrationError("If passing name as string, description is required.")
            tool = self._generate_tool_definition(name_or_tool, description, handler, args_model, required)

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.debug("Registered tool: '%s'", tool.name)
        return tool

    def unregister(self, tool_name: str) -> None:
        """Unregister a tool from the registry.

        Args:
            tool_name: The name of the tool to remove.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        if tool_name not in self.tools:
            raise ToolNotFoundError(f"Unknown tool: {tool_name}")
        del self.tools[tool_name]
        logger.debug("Unregistered tool: '%s'", tool_name)

    def get(self, tool_name: str) -> ToolDefinition:
        """Look up a tool by name.

        Raises:
            ToolNotFoundError: If no tool of that name is registered.
        """
        try:
            return self.tools[tool_name]
        except KeyError:
            msg = f"Unknown tool: {tool_name}"
            logger.warning(msg)
            raise ToolNotFoundError(msg) from None

    @property
    def tool_object(self) -> List[Tool]:
        """The MCP catalog, in registration order."""
        return [tool.to_mcp_tool() for tool in self.tools.values()]

    @property
    def implementations(self) -> Dict[str, ToolHandler]:
        """Returns a dictionary mapping tool names to their handlers."""
        return {name: tool.handler for name, tool in self.tools.items()}

    @staticmethod
    def _generate_tool_definition(
        name: str,
        description: str,
        handler: ToolHandler,
        args_model: Optional[Type[BaseModel]],
        required: Iterable[str],
    ) -> ToolDefinition:
        """Build a ToolDefinition whose input schema is derived from `args_model`."""
        schema: Dict[str, Any] = {"type": "object", "properties": {}, "required": []}
        if args_model is not None:
            schema = SchemaValidator.sanitize_schema(args_model.model_json_schema())
            schema.setdefault("required", [])
        schema = SchemaValidator.require(schema, required)

        return ToolDefinition(
            name=name,
            description=description,
            handler=handler,
            input_schema=schema,
            args_model=args_model,
        )
