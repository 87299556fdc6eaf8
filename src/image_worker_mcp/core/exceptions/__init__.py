"""Export the exception hierarchy used across validation, dispatch and process execution."""

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

__all__ = [
    "ImageWorkerError",
    "InvalidArgumentsError",
    "ToolNotFoundError",
    "ToolRegistrationError",
    "ImageGenerationError",
    "ProcessError",
    "ProcessSpawnError",
    "ProcessExecutionError",
    "ProcessTimeoutError",
]
