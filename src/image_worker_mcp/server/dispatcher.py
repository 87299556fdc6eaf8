"""Route tool calls by name and translate failures into protocol errors."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.types import TextContent, Tool

from .catalog import build_registry
from ..core.config import WorkerConfig
from ..core.exceptions import ImageWorkerError
from ..core.logger import get_logger
from ..handlers import ImageGenerationHandler
from ..runner import ProcessRunner
from ..tools import ProgressCallback, ToolCallRequest, ToolRegistry

logger = get_logger(__name__)


class ToolDispatcher:
    """Entry point for the two protocol operations: listing and calling tools."""

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    @classmethod
    def from_config(cls, config: WorkerConfig, runner: Optional[ProcessRunner] = None) -> ToolDispatcher:
        """Build a dispatcher serving the image tools.

        Args:
            config: Worker configuration, including the credential passed to the runner.
            runner: Optional process runner, e.g. a test double. Built from `config` when omitted.
        """
        handler = ImageGenerationHandler(config, runner)
        return cls(build_registry(config, handler))

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def list_tools(self) -> List[Tool]:
        """Returns the static catalog."""
        return self._registry.tool_object

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[TextContent]:
        """Dispatch a call to the tool's handler.

        Args:
            name: Name of the tool to call.
            arguments: Raw call arguments. Missing arguments count as an empty mapping.
            on_progress: Optional callback receiving progress updates.

        Returns:
            The content blocks produced by the handler.

        Raises:
            McpError: With ``METHOD_NOT_FOUND`` for unknown tools, ``INVALID_PARAMS`` for rejected
                arguments and ``INTERNAL_ERROR`` for failed generations.
        """
        request = ToolCallRequest.from_params(name, arguments)
        try:
            tool = self._registry.get(request.name)
            logger.info("Calling tool '%s'.", request.name)
            logger.debug("Tool arguments: %s", request.arguments)
            return await tool.handler(request.arguments, on_progress)
        except ImageWorkerError as e:
            raise e.to_mcp_error() from e
