"""External process execution for the image tools."""

from .command import build_command, format_command
from .invocation import InvocationState, ProcessInvocation, ProcessResult
from .process_runner import ProcessRunner, ProgressCallback

__all__ = [
    "build_command",
    "format_command",
    "InvocationState",
    "ProcessInvocation",
    "ProcessResult",
    "ProcessRunner",
    "ProgressCallback",
]
