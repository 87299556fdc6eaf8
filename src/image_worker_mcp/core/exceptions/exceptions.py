"""
Exception classes for the image worker.

Every exception carries the MCP error code it is reported with. Handlers and
the process runner raise these; only the dispatcher turns them into
protocol errors.
"""

from typing import Optional

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class ImageWorkerError(Exception):
    """Base exception for all image worker errors."""

    error_code: int = INTERNAL_ERROR

    def to_mcp_error(self) -> McpError:
        """Wrap this error into the protocol-level error sent to the caller."""
        return McpError(ErrorData(code=self.error_code, message=str(self)))


class InvalidArgumentsError(ImageWorkerError):
    """Raised when call arguments are missing or malformed, or the output directory is unusable."""

    error_code = INVALID_PARAMS


class ToolNotFoundError(ImageWorkerError):
    """Raised when a requested tool is not in the catalog."""

    error_code = METHOD_NOT_FOUND


class ToolRegistrationError(ImageWorkerError):
    """Raised when there is an error registering a tool."""

    pass


class ImageGenerationError(ImageWorkerError):
    """Raised when the generator run failed. Wraps the underlying process error."""

    pass


class ProcessError(ImageWorkerError):
    """Base class for failures of the external generator process."""

    pass


class ProcessSpawnError(ProcessError):
    """Raised when the operating system could not start the external command."""

    pass


class ProcessExecutionError(ProcessError):
    """Raised when the external command exits with a non-zero code."""

    def __init__(self, exit_code: Optional[int], stdout: str, stderr: str) -> None:
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Command failed with exit code {exit_code}.\nStdout: {stdout}\nStderr: {stderr}")


class ProcessTimeoutError(ProcessError):
    """Raised when the watchdog terminated the external command."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout:g} seconds")
