"""Tool-related data models."""

from .models import ProgressCallback, ToolDefinition, ToolHandler
from .tool_call import ToolCallRequest

__all__ = ["ProgressCallback", "ToolDefinition", "ToolHandler", "ToolCallRequest"]
