from .models import ProgressCallback, ToolDefinition, ToolHandler, ToolCallRequest
from .registry import ToolRegistry
from .schema import SchemaValidator
from .arguments import DEFAULT_SIZE, GenerateImageArgs, ImageOptions, parse_arguments

__all__ = [
    "ProgressCallback",
    "ToolDefinition",
    "ToolHandler",
    "ToolCallRequest",
    "ToolRegistry",
    "SchemaValidator",
    "DEFAULT_SIZE",
    "GenerateImageArgs",
    "ImageOptions",
    "parse_arguments",
]
