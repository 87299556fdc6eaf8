"""Public exports for configuration, logging and errors."""

from .config import WorkerConfig
from .exceptions import (
    ImageWorkerError,
    InvalidArgumentsError,
    ToolNotFoundError,
    ToolRegistrationError,
    ImageGenerationError,
    ProcessError,
    ProcessSpawnError,
    ProcessExecutionError,
    ProcessTimeoutError,
)
from .logger import get_logger, setup_logging

__all__ = [
    "WorkerConfig",
    "ImageWorkerError",
    "InvalidArgumentsError",
    "ToolNotFoundError",
    "ToolRegistrationError",
    "ImageGenerationError",
    "ProcessError",
    "ProcessSpawnError",
    "ProcessExecutionError",
    "ProcessTimeoutError",
    "get_logger",
    "setup_logging",
]
