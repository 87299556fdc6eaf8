"""Image Worker MCP - expose the ai-image command-line generator as MCP tools."""

from .core import (
    WorkerConfig,
    ImageWorkerError,
    InvalidArgumentsError,
    ToolNotFoundError,
    ImageGenerationError,
    ProcessSpawnError,
    ProcessExecutionError,
    ProcessTimeoutError,
    get_logger,
    setup_logging,
)
from .handlers import ImageGenerationHandler
from .runner import ProcessRunner, ProcessResult
from .server import ToolDispatcher, build_server, serve_stdio
from .tools import ToolDefinition, ToolRegistry

__version__ = "0.1.0"

__all__ = [
    "WorkerConfig",
    "ImageWorkerError",
    "InvalidArgumentsError",
    "ToolNotFoundError",
    "ImageGenerationError",
    "ProcessSpawnError",
    "ProcessExecutionError",
    "ProcessTimeoutError",
    "get_logger",
    "setup_logging",
    "ImageGenerationHandler",
    "ProcessRunner",
    "ProcessResult",
    "ToolDispatcher",
    "build_server",
    "serve_stdio",
    "ToolDefinition",
    "ToolRegistry",
]
